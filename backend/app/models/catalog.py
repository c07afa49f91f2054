"""ORM models for the time-tracking system of record."""

from datetime import date

from sqlalchemy import Date, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.matching_engine.types import CanonicalEntity
from app.models.base import Base, TimestampMixin


class Company(Base, TimestampMixin):
    __tablename__ = "company"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def to_entity(self) -> CanonicalEntity:
        return CanonicalEntity(id=self.id, name=self.name or "", email=self.email)


class Product(Base, TimestampMixin):
    __tablename__ = "product"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def to_entity(self) -> CanonicalEntity:
        return CanonicalEntity(id=self.id, name=self.name or "")


class Project(Base, TimestampMixin):
    __tablename__ = "project"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Identifier of the project on the external project tracker, when known
    external_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    timelogs: Mapped[list["TimeLog"]] = relationship(back_populates="project")

    def to_entity(self) -> CanonicalEntity:
        return CanonicalEntity(id=self.id, name=self.name or "")


class TimeLog(Base, TimestampMixin):
    __tablename__ = "timelogs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    project_id: Mapped[int | None] = mapped_column(
        ForeignKey("project.id", ondelete="SET NULL"), nullable=True
    )
    reference_number: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    log_date: Mapped[date] = mapped_column(Date, nullable=False)
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)  # hours
    description: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    project: Mapped["Project"] = relationship(back_populates="timelogs")
