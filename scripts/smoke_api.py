#!/usr/bin/env python3
"""Smoke test a running ledger API: sign in, book a gig, take a payment, read the report."""

import argparse
import sys

import httpx


def _login(client: httpx.Client, email: str, password: str) -> str | None:
    print("=" * 60)
    print("Signing in")
    print("=" * 60)

    register = client.post("/auth/register", json={"name": "Smoke Test", "email": email, "password": password})
    if register.status_code == 201:
        print(f"✅ Registered {email}")
    elif register.status_code == 409:
        print(f"ℹ️  {email} already registered")
    else:
        print(f"❌ Register failed: {register.status_code} {register.text}")
        return None

    try:
        response = client.post("/auth/login", json={"email": email, "password": password})
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None

    print("✅ Logged in")
    return response.json()["token"]


def _book_and_pay(client: httpx.Client) -> bool:
    print("\n" + "=" * 60)
    print("Creating a booking and recording the balance")
    print("=" * 60)

    payload = {
        "client_name": "Smoke Test Client",
        "client_phone": "+91 90000 00000",
        "event_type": "corporate",
        "start": "2030-01-10T19:00:00",
        "end": "2030-01-10T23:00:00",
        "location": "Test Venue",
        "total_amount": 25000,
        "deposit_amount": 5000,
    }
    try:
        booking = client.post("/bookings", json=payload)
        booking.raise_for_status()
        data = booking.json()
        print(f"✅ Booking {data['id']} [{data['status']}] pending {data['pending_amount']:.2f}")

        payment = client.post("/payments", json={"booking_id": data["id"], "method": "bankTransfer"})
        payment.raise_for_status()
        paid = payment.json()
        print(f"✅ Payment {paid['transaction_id']} for {paid['amount']:.2f}")

        balance = client.get(f"/bookings/{data['id']}/balance")
        balance.raise_for_status()
        print(f"   Outstanding after payment: {balance.json()['outstanding']:.2f}")
        return True
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False


def _report(client: httpx.Client) -> None:
    print("\n" + "=" * 60)
    print("Financial summary")
    print("=" * 60)

    response = client.get("/reports/summary")
    if response.status_code != 200:
        print(f"❌ HTTP Error: {response.status_code}")
        return
    data = response.json()
    print(f"  Revenue:  {data['revenue']:.2f} {data['currency']}")
    print(f"  Expenses: {data['expenses']:.2f} {data['currency']}")
    print(f"  Profit:   {data['profit']:.2f} {data['currency']}")
    print(f"  Bookings: {data['bookings']}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke test a running ledger API")
    parser.add_argument("--url", default="http://127.0.0.1:8000")
    parser.add_argument("--email", default="smoke@example.com")
    parser.add_argument("--password", default="smoke-test-pass")
    args = parser.parse_args()

    print("\n🚀 Testing Ledger API\n")

    with httpx.Client(base_url=args.url, timeout=10.0) as client:
        try:
            client.get("/health")
        except httpx.ConnectError:
            print("❌ Server is not running!")
            print("   Please start it with: uvicorn gigledger.main:app --reload")
            sys.exit(1)

        token = _login(client, args.email, args.password)
        if token is None:
            sys.exit(1)
        client.headers["Authorization"] = f"Bearer {token}"

        if _book_and_pay(client):
            _report(client)

    print("\n" + "=" * 60)
    print("✅ Smoke test complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
