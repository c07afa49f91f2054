from fastapi import APIRouter

from app.api.v1 import (
    companies,
    health,
    products,
    projects,
    reconciliation,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/v1", tags=["health"])
api_router.include_router(companies.router, prefix="/v1/companies", tags=["companies"])
api_router.include_router(products.router, prefix="/v1/products", tags=["products"])
api_router.include_router(projects.router, prefix="/v1/projects", tags=["projects"])
api_router.include_router(projects.webhook_router, prefix="/v1/webhooks", tags=["webhooks"])
api_router.include_router(reconciliation.router, prefix="/v1/reconciliation", tags=["reconciliation"])
