from fastapi import APIRouter

from hr_ledger.api.attendance import attendance_router
from hr_ledger.api.employees import employees_router
from hr_ledger.api.leave_requests import admin_leave_requests_router, leave_requests_router
from hr_ledger.api.loan_requests import admin_loan_requests_router, loan_requests_router
from hr_ledger.api.payroll import payroll_router

api_router = APIRouter()
api_router.include_router(employees_router)
api_router.include_router(leave_requests_router)
api_router.include_router(admin_leave_requests_router)
api_router.include_router(loan_requests_router)
api_router.include_router(admin_loan_requests_router)
api_router.include_router(attendance_router)
api_router.include_router(payroll_router)
