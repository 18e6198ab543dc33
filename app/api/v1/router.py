"""API v1 router configuration."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    admin,
    auth,
    catalog,
    forms,
    health,
    orders,
    payments,
    staff,
    staff_actions,
    staff_workflow,
    surveys,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(staff_workflow.router)
api_router.include_router(staff.router)
api_router.include_router(staff_actions.router)
api_router.include_router(admin.router)
api_router.include_router(orders.router)
api_router.include_router(payments.router)
api_router.include_router(catalog.router)
api_router.include_router(forms.router)
api_router.include_router(surveys.router)
