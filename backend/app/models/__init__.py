from app.models.base import Base, TimestampMixin
from app.models.catalog import Company, Product, Project, TimeLog

__all__ = [
    "Base",
    "TimestampMixin",
    "Company",
    "Product",
    "Project",
    "TimeLog",
]
