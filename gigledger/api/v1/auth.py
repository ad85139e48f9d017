from fastapi import APIRouter, Depends, HTTPException, Response

from gigledger.api.v1.schemas import LoginRequestSchema, LoginResponseSchema, RegisterRequestSchema, UserSchema
from gigledger.application.exceptions import AuthenticationError, DuplicateRecordError, ValidationError
from gigledger.application.use_cases.accounts import AccountService
from gigledger.wiring.dependencies import bearer_token, get_account_service

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=UserSchema, status_code=201)
def register(req: RegisterRequestSchema, svc: AccountService = Depends(get_account_service)):
    try:
        user = svc.register(name=req.name, email=req.email, password=req.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    except DuplicateRecordError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return UserSchema.from_entity(user)


@router.post("/login", response_model=LoginResponseSchema)
def login(req: LoginRequestSchema, svc: AccountService = Depends(get_account_service)):
    try:
        token = svc.login(email=req.email, password=req.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return LoginResponseSchema(token=token)


@router.post("/logout", status_code=204)
def logout(
    token: str | None = Depends(bearer_token),
    svc: AccountService = Depends(get_account_service),
):
    if not token:
        raise HTTPException(status_code=401, detail="Missing session token")
    svc.logout(token)
    return Response(status_code=204)


@router.get("/me", response_model=UserSchema)
def me(
    token: str | None = Depends(bearer_token),
    svc: AccountService = Depends(get_account_service),
):
    try:
        return UserSchema.from_entity(svc.current_user(token))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e), headers={"WWW-Authenticate": "Bearer"})
