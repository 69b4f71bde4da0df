"""API routes."""

from payslip_engine.api.routes.admin import router as admin_router
from payslip_engine.api.routes.employee import router as employee_router
from payslip_engine.api.routes.health import router as health_router

__all__ = ["admin_router", "employee_router", "health_router"]
