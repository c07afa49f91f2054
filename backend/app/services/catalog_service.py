"""Loaders that turn system-of-record rows into plain records for the core."""

from datetime import date

from sqlalchemy import distinct, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.matching_engine.types import CanonicalEntity
from app.models.catalog import Company, Product, Project, TimeLog
from app.project_linker.variance import ActualHours
from app.reconciliation_engine.engine import ReportEntry


async def load_companies(db: AsyncSession) -> list[CanonicalEntity]:
    result = await db.execute(select(Company).order_by(Company.name.asc(), Company.id.asc()))
    return [c.to_entity() for c in result.scalars().all()]


async def get_company(db: AsyncSession, company_id: int) -> CanonicalEntity | None:
    company = await db.get(Company, company_id)
    return company.to_entity() if company else None


async def load_products(db: AsyncSession) -> list[CanonicalEntity]:
    result = await db.execute(select(Product).order_by(Product.id.asc()))
    return [p.to_entity() for p in result.scalars().all()]


async def load_projects(db: AsyncSession) -> list[CanonicalEntity]:
    result = await db.execute(
        select(Project).where(Project.name != "").order_by(Project.id.asc())
    )
    return [p.to_entity() for p in result.scalars().all()]


async def actual_hours_by_reference(db: AsyncSession, since: date) -> dict[str, ActualHours]:
    """Logged hours grouped by time log reference number (external project id)."""
    rows = (await db.execute(
        select(
            TimeLog.reference_number,
            func.sum(TimeLog.duration),
            func.count(TimeLog.id),
            func.count(distinct(TimeLog.user_id)),
        )
        .where(TimeLog.reference_number.is_not(None))
        .where(TimeLog.reference_number != "")
        .where(TimeLog.log_date >= since)
        .group_by(TimeLog.reference_number)
    )).all()

    return {
        str(ref).strip(): ActualHours(
            hours=float(total or 0.0),
            entry_count=int(count or 0),
            unique_users=int(users or 0),
        )
        for ref, total, count, users in rows
    }


async def time_tracker_entries(db: AsyncSession) -> list[ReportEntry]:
    """One report entry per time log reference number, with summed hours."""
    rows = (await db.execute(
        select(TimeLog.reference_number, func.sum(TimeLog.duration))
        .where(TimeLog.reference_number.is_not(None))
        .where(TimeLog.reference_number != "")
        .group_by(TimeLog.reference_number)
    )).all()
    return [ReportEntry(task_ref=str(ref).strip(), hours=float(total or 0.0)) for ref, total in rows]


async def company_timelogs(
    db: AsyncSession,
    company_name: str,
    start_date: date | None = None,
    end_date: date | None = None,
    limit: int = 50,
) -> list[dict]:
    """Most recent time logs on projects named "<Year> - <Company>[ - <Product>]"."""
    escaped = company_name.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    query = (
        select(TimeLog, Project.name)
        .join(Project, TimeLog.project_id == Project.id)
        .where(or_(
            Project.name.like(f"% - {escaped} - %", escape="\\"),
            Project.name.like(f"% - {escaped}", escape="\\"),
        ))
    )
    if start_date and end_date:
        query = query.where(TimeLog.log_date.between(start_date, end_date))
    query = query.order_by(TimeLog.log_date.desc(), TimeLog.id.desc()).limit(limit)

    rows = (await db.execute(query)).all()
    return [
        {
            "id": log.id,
            "date": log.log_date.isoformat(),
            "duration": log.duration,
            "user_id": log.user_id,
            "project_name": project_name,
            "reference_number": log.reference_number,
            "description": log.description,
        }
        for log, project_name in rows
    ]
