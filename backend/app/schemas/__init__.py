from app.schemas.health import ErrorResponse, HealthResponse
from app.schemas.matching import CompanyMatchResponse, EntityResponse, ProductMatchResponse
from app.schemas.project_link import ProjectLinkResponse, ProjectSyncRequest, VarianceReportResponse
from app.schemas.reconciliation import ReconciliationRequest, ReconciliationResponse

__all__ = [
    "CompanyMatchResponse",
    "EntityResponse",
    "ErrorResponse",
    "HealthResponse",
    "ProductMatchResponse",
    "ProjectLinkResponse",
    "ProjectSyncRequest",
    "ReconciliationRequest",
    "ReconciliationResponse",
    "VarianceReportResponse",
]
