"""SQLAlchemy models for tradeclaims database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Trade(Base):
    """Trade model.

    Dates and amounts are stored as the text that was ingested.
    """

    __tablename__ = "trades"

    id = Column(Integer, primary_key=True)
    trade_id = Column(String, unique=True, nullable=False)
    client_id = Column(String, nullable=True)
    counterparty = Column(String, nullable=True)
    trade_date = Column(String, nullable=True)
    value_date = Column(String, nullable=True)
    settlement_date = Column(String, nullable=True)
    notional_amount = Column(String, nullable=True)
    pnl_calculated = Column(String, nullable=True)
    confirmation_status = Column(String, nullable=True)
    expense_approval_status = Column(String, nullable=True)
    cost_allocation_status = Column(String, nullable=True)
    currency = Column(String, nullable=True)
    data_type = Column(String, nullable=False, default="fx")
    imported_at = Column(DateTime, default=_utcnow, nullable=False)


class ImportFormat(Base):
    """Import format definition model."""

    __tablename__ = "import_formats"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    data_type = Column(String, nullable=False, default="fx")
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    column_mappings = relationship(
        "ColumnMapping", back_populates="format", cascade="all, delete-orphan"
    )


class ColumnMapping(Base):
    """Import column mapping model."""

    __tablename__ = "column_mappings"

    id = Column(Integer, primary_key=True)
    format_id = Column(Integer, ForeignKey("import_formats.id"), nullable=False)
    column_name = Column(String, nullable=False)
    field_name = Column(String, nullable=False)

    # One column per canonical field within a format
    __table_args__ = (UniqueConstraint("format_id", "field_name", name="uq_format_field"),)

    # Relationships
    format = relationship("ImportFormat", back_populates="column_mappings")


class CounterpartyRate(Base):
    """Annual interest rate per counterparty."""

    __tablename__ = "counterparty_rates"

    id = Column(Integer, primary_key=True)
    counterparty = Column(String, unique=True, nullable=False)
    annual_rate = Column(Numeric(9, 6), nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


class ClaimSnapshot(Base):
    """Saved copy of a classification result."""

    __tablename__ = "claim_snapshots"

    id = Column(Integer, primary_key=True)
    claim_id = Column(String, nullable=False)
    trade_id = Column(String, nullable=False)
    counterparty = Column(String, nullable=False)
    claim_type = Column(String, nullable=False)
    categories = Column(String, nullable=False)
    sla_breach_days = Column(Integer, nullable=False)
    interest_amount = Column(Numeric(18, 2), nullable=False)
    saved_at = Column(DateTime, default=_utcnow, nullable=False)


class ClaimRemark(Base):
    """Free-text remark keyed by claim ID."""

    __tablename__ = "claim_remarks"

    id = Column(Integer, primary_key=True)
    claim_id = Column(String, unique=True, nullable=False)
    remark = Column(String, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


class ClaimStatus(Base):
    """Settlement status keyed by claim ID."""

    __tablename__ = "claim_statuses"

    id = Column(Integer, primary_key=True)
    claim_id = Column(String, unique=True, nullable=False)
    status = Column(String, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
