"""Seed script for development data.

Run against a live server:  python -m hr_ledger.seed [BASE_URL]
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date, timedelta

import httpx

BASE_URL = "http://localhost:8000"

HEADERS = {
    "Content-Type": "application/json",
    "X-User-Id": "ADMIN-001",
    "X-Role": "admin",
}

EMPLOYEES = [
    {"id": "ADMIN-001", "name": "Sana Qureshi", "email": "sana.qureshi@example.com", "role": "admin"},
    {"id": "EMP-101", "name": "Bilal Ahmed", "email": "bilal.ahmed@example.com", "basic_salary": "85000.00"},
    {"id": "EMP-102", "name": "Ayesha Khan", "email": "ayesha.khan@example.com", "basic_salary": "92000.00"},
    {"id": "EMP-103", "name": "Usman Tariq", "email": None, "basic_salary": "60000.00", "leave_casual": 2},
]

# (employee_id, type, days from today, days, reason, decision)
LEAVES = [
    ("EMP-101", "AnnualLeave", 7, 3, "Family wedding", "Approved"),
    ("EMP-102", "Casual", 2, 1, "Personal errand", None),
    ("EMP-103", "Casual", 10, 5, "Travel", "Approved"),
    ("EMP-102", "Sick", 0, 2, "Flu", "Rejected"),
]

# (employee_id, amount, reason, decision)
LOANS = [
    ("EMP-101", "50000.00", "Home repair", "Approved"),
    ("EMP-102", "25000.00", "Medical bills", None),
]


async def _safe_post(client: httpx.AsyncClient, url: str, json: dict, label: str) -> dict | None:
    """POST with 409-conflict tolerance so the script can be rerun."""
    resp = await client.post(url, json=json, headers=HEADERS)
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        return resp.json()
    if resp.status_code == 409:
        print(f"  [SKIP] {label} (already exists)")
        return None
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def _decide(client: httpx.AsyncClient, url: str, decision: str, label: str) -> None:
    resp = await client.put(url, json={"status": decision}, headers=HEADERS)
    if resp.status_code == 200:
        print(f"  [OK] {label} -> {decision}")
    else:
        print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")


async def seed_employees(client: httpx.AsyncClient, base_url: str) -> None:
    print("\n--- Seeding employees ---")
    for emp in EMPLOYEES:
        await _safe_post(client, f"{base_url}/employees", emp, f"{emp['id']} {emp['name']}")


async def seed_leaves(client: httpx.AsyncClient, base_url: str) -> None:
    print("\n--- Seeding leave requests ---")
    today = date.today()
    for employee_id, leave_type, offset, days, reason, decision in LEAVES:
        label = f"{employee_id} {leave_type} x{days}"
        created = await _safe_post(
            client,
            f"{base_url}/leave-requests",
            {
                "employeeId": employee_id,
                "type": leave_type,
                "startDate": (today + timedelta(days=offset)).isoformat(),
                "days": days,
                "reason": reason,
            },
            label,
        )
        if created is not None and decision is not None:
            await _decide(client, f"{base_url}/leave-requests/{created['id']}", decision, label)


async def seed_loans(client: httpx.AsyncClient, base_url: str) -> None:
    print("\n--- Seeding loan requests ---")
    for employee_id, amount, reason, decision in LOANS:
        label = f"{employee_id} Rs. {amount}"
        created = await _safe_post(
            client,
            f"{base_url}/loan-requests",
            {"employeeId": employee_id, "amount": amount, "reason": reason},
            label,
        )
        if created is not None and decision is not None:
            await _decide(client, f"{base_url}/loan-requests/{created['id']}", decision, label)


async def main(base_url: str = BASE_URL) -> None:
    print("=" * 60)
    print("  LSAF HR - Development Seed Script")
    print("=" * 60)

    async with httpx.AsyncClient(timeout=30.0) as client:
        try:
            resp = await client.get(f"{base_url}/health")
            if resp.status_code != 200:
                print(f"API health check failed: {resp.status_code}")
                sys.exit(1)
            print("\n[OK] API is healthy")
        except httpx.ConnectError:
            print("ERROR: Cannot connect to API at", base_url)
            sys.exit(1)

        await seed_employees(client, base_url)
        await seed_leaves(client, base_url)
        await seed_loans(client, base_url)

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else BASE_URL))
