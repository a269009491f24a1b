"""Integration tests for the loan request API."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from httpx import AsyncClient

    from hr_ledger.services.notification import InMemoryNotificationSink, NotificationDispatcher

ADMIN_HEADERS = {"X-User-Id": "ADMIN-001", "X-Role": "admin"}
EMPLOYEE_HEADERS = {"X-User-Id": "E1", "X-Role": "employee"}
LOANS_URL = "/loan-requests"


async def _submit(client: AsyncClient, employee_id: str = "E1", amount: str = "25000.50") -> dict:
    resp = await client.post(
        LOANS_URL,
        json={"employeeId": employee_id, "amount": amount, "reason": "Medical bills"},
        headers=EMPLOYEE_HEADERS,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_submit_loan(async_client: AsyncClient, make_employee) -> None:
    await make_employee("E1")

    data = await _submit(async_client)

    assert data["employee_id"] == "E1"
    assert data["amount"] == "25000.50"
    assert data["reason"] == "Medical bills"
    assert data["status"] == "Pending"


async def test_submit_loan_non_positive_amount(async_client: AsyncClient, make_employee) -> None:
    await make_employee("E1")

    resp = await async_client.post(LOANS_URL, json={"employeeId": "E1", "amount": "0"}, headers=EMPLOYEE_HEADERS)

    assert resp.status_code == 400


async def test_submit_loan_unknown_employee(async_client: AsyncClient) -> None:
    resp = await async_client.post(LOANS_URL, json={"employeeId": "NOPE", "amount": "10"}, headers=EMPLOYEE_HEADERS)

    assert resp.status_code == 404


async def test_approve_loan_once(
    async_client: AsyncClient,
    make_employee,
    read_employee,
    dispatcher: NotificationDispatcher,
    sink: InMemoryNotificationSink,
) -> None:
    await make_employee("E1", email="e1@example.com")
    created = await _submit(async_client)

    resp = await async_client.put(f"{LOANS_URL}/{created['id']}", json={"status": "Approved"}, headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "id": created["id"], "status": "Approved", "remaining_balance": None}

    again = await async_client.put(f"{LOANS_URL}/{created['id']}", json={"status": "Rejected"}, headers=ADMIN_HEADERS)
    assert again.status_code == 409

    await dispatcher.drain()
    assert [m.subject for m in sink.to("e1@example.com")] == ["Loan Application Received", "Loan Application Update"]
    employee = await read_employee("E1")
    assert employee is not None
    assert (employee.leave_annual, employee.leave_casual) == (14, 10)


async def test_decide_loan_requires_admin(async_client: AsyncClient, make_employee) -> None:
    await make_employee("E1")
    created = await _submit(async_client)

    resp = await async_client.put(
        f"{LOANS_URL}/{created['id']}", json={"status": "Approved"}, headers=EMPLOYEE_HEADERS
    )

    assert resp.status_code == 403


async def test_decide_missing_loan(async_client: AsyncClient) -> None:
    resp = await async_client.put(f"{LOANS_URL}/777", json={"status": "Rejected"}, headers=ADMIN_HEADERS)

    assert resp.status_code == 404


async def test_out_of_range_loan_id_is_not_found(async_client: AsyncClient) -> None:
    huge = 10**20

    decided = await async_client.put(f"{LOANS_URL}/{huge}", json={"status": "Rejected"}, headers=ADMIN_HEADERS)
    fetched = await async_client.get(f"{LOANS_URL}/detail/{huge}", headers=EMPLOYEE_HEADERS)

    assert decided.status_code == 404
    assert fetched.status_code == 404


async def test_get_loan_detail(async_client: AsyncClient, make_employee) -> None:
    await make_employee("E1")
    created = await _submit(async_client, amount="1200")

    resp = await async_client.get(f"{LOANS_URL}/detail/{created['id']}", headers=EMPLOYEE_HEADERS)

    assert resp.status_code == 200
    assert resp.json()["id"] == created["id"]


async def test_list_employee_loans_newest_first(async_client: AsyncClient, make_employee) -> None:
    await make_employee("E1")
    first = await _submit(async_client, amount="100")
    second = await _submit(async_client, amount="200")

    resp = await async_client.get(f"{LOANS_URL}/E1", headers=EMPLOYEE_HEADERS)

    assert [item["id"] for item in resp.json()] == [second["id"], first["id"]]


async def test_admin_list_all_loans(async_client: AsyncClient, make_employee) -> None:
    await make_employee("E1", name="Bilal Ahmed")
    await _submit(async_client)

    resp = await async_client.get("/admin/loan-requests", headers=ADMIN_HEADERS)

    assert resp.status_code == 200
    [item] = resp.json()
    assert item["employee_name"] == "Bilal Ahmed"
    assert item["status"] == "Pending"
