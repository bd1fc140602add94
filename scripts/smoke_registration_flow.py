#!/usr/bin/env python3
"""
Smoke script for a running server: register, verify the OTP, approve, scan and check in.
The OTP is read from the server log (fallback delivery channel) and typed in.
"""

import os
import requests

API_BASE = os.getenv("API_URL", "http://localhost:5001/api")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")


def login():
    """Login and get JWT token"""
    response = requests.post(
        f"{API_BASE}/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    if response.status_code == 200:
        return response.json()["data"]["access_token"]
    print(f"Login failed: {response.status_code} - {response.text}")
    return None


def first_event_id():
    response = requests.get(f"{API_BASE}/events")
    events = response.json().get("data", [])
    return events[0]["id"] if events else None


def run_flow(token, event_id):
    headers = {"Authorization": f"Bearer {token}"}

    print(f"\n1. Registering a guest for event {event_id}...")
    response = requests.post(
        f"{API_BASE}/registrations",
        json={
            "eventId": event_id,
            "firstName": "Juan",
            "lastName": "Dela Cruz",
            "contact": "09171234567",
            "customValues": {"shirtSize": "M"},
        },
    )
    print(f"Registration response: {response.status_code} - {response.json()}")
    if response.status_code != 201:
        return False
    registration_id = response.json()["data"]["registrationId"]

    code = input("\n2. Enter the OTP printed in the server log: ").strip()
    response = requests.post(
        f"{API_BASE}/otp/verify", json={"registrationId": registration_id, "code": code}
    )
    print(f"Verify response: {response.status_code} - {response.json()}")
    if response.status_code != 200:
        return False
    qr_value = response.json()["data"]["qrValue"]

    print("\n3. Approving registration...")
    response = requests.post(
        f"{API_BASE}/registrations/{registration_id}/approval",
        json={"status": "approved"},
        headers=headers,
    )
    print(f"Approval response: {response.status_code} - {response.json()}")

    print("\n4. Scanning QR...")
    response = requests.post(f"{API_BASE}/qr/scan", json={"qrValue": qr_value}, headers=headers)
    print(f"Scan response: {response.status_code} - {response.json()}")

    print("\n5. Checking in...")
    response = requests.post(f"{API_BASE}/registrations/{registration_id}/checkin", headers=headers)
    print(f"Check-in response: {response.status_code} - {response.json()}")
    return response.status_code == 200


def main():
    print("Starting registration flow smoke test...")

    token = login()
    if not token:
        print("❌ Login failed, cannot continue")
        return

    event_id = first_event_id()
    if not event_id:
        print("❌ No events found; run create_demo_accounts.py first")
        return

    if run_flow(token, event_id):
        print("\n✅ Registration flow completed successfully!")
    else:
        print("\n❌ Registration flow failed!")


if __name__ == "__main__":
    main()
