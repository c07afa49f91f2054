from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    database: str
    redis: str
    project_link_store: str
    timestamp: datetime
    environment: str
    version: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
