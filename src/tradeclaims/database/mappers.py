"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal

from tradeclaims.domain import entities as domain
from tradeclaims.database.models import (
    Trade as ORMTrade,
    ImportFormat as ORMImportFormat,
    ColumnMapping as ORMColumnMapping,
    CounterpartyRate as ORMCounterpartyRate,
    ClaimSnapshot as ORMClaimSnapshot,
    ClaimRemark as ORMClaimRemark,
    ClaimStatus as ORMClaimStatus,
)


def trade_to_domain(orm_trade: ORMTrade) -> domain.TradeRecord:
    """Convert SQLAlchemy Trade model to domain TradeRecord entity."""
    return domain.TradeRecord(
        trade_id=orm_trade.trade_id,
        client_id=orm_trade.client_id,
        counterparty=orm_trade.counterparty,
        trade_date=orm_trade.trade_date,
        value_date=orm_trade.value_date,
        settlement_date=orm_trade.settlement_date,
        notional_amount=orm_trade.notional_amount,
        pnl_calculated=orm_trade.pnl_calculated,
        confirmation_status=orm_trade.confirmation_status,
        expense_approval_status=orm_trade.expense_approval_status,
        cost_allocation_status=orm_trade.cost_allocation_status,
        currency=orm_trade.currency,
        data_type=orm_trade.data_type,
        imported_at=orm_trade.imported_at,
    )


def trade_to_orm(record: domain.TradeRecord) -> ORMTrade:
    """Convert domain TradeRecord entity to a new SQLAlchemy Trade model."""

    def text(value):
        return None if value is None else str(value)

    return ORMTrade(
        trade_id=record.trade_id,
        client_id=record.client_id,
        counterparty=record.counterparty,
        trade_date=record.trade_date,
        value_date=record.value_date,
        settlement_date=record.settlement_date,
        notional_amount=text(record.notional_amount),
        pnl_calculated=text(record.pnl_calculated),
        confirmation_status=record.confirmation_status,
        expense_approval_status=record.expense_approval_status,
        cost_allocation_status=record.cost_allocation_status,
        currency=record.currency,
        data_type=record.data_type,
    )


def import_format_to_domain(orm_format: ORMImportFormat) -> domain.ImportFormat:
    """Convert SQLAlchemy ImportFormat model to domain ImportFormat entity."""
    return domain.ImportFormat(
        id=orm_format.id,
        name=orm_format.name,
        data_type=orm_format.data_type,
        created_at=orm_format.created_at,
    )


def column_mapping_to_domain(orm_mapping: ORMColumnMapping) -> domain.ColumnMapping:
    """Convert SQLAlchemy ColumnMapping model to domain ColumnMapping entity."""
    return domain.ColumnMapping(
        id=orm_mapping.id,
        format_id=orm_mapping.format_id,
        column_name=orm_mapping.column_name,
        field_name=orm_mapping.field_name,
    )


def counterparty_rate_to_domain(orm_rate: ORMCounterpartyRate) -> domain.CounterpartyRate:
    """Convert SQLAlchemy CounterpartyRate model to domain CounterpartyRate entity."""
    return domain.CounterpartyRate(
        id=orm_rate.id,
        counterparty=orm_rate.counterparty,
        annual_rate=Decimal(orm_rate.annual_rate),
        updated_at=orm_rate.updated_at,
    )


def claim_snapshot_to_domain(orm_snapshot: ORMClaimSnapshot) -> domain.ClaimSnapshot:
    """Convert SQLAlchemy ClaimSnapshot model to domain ClaimSnapshot entity."""
    return domain.ClaimSnapshot(
        id=orm_snapshot.id,
        claim_id=orm_snapshot.claim_id,
        trade_id=orm_snapshot.trade_id,
        counterparty=orm_snapshot.counterparty,
        claim_type=orm_snapshot.claim_type,
        categories=orm_snapshot.categories,
        sla_breach_days=orm_snapshot.sla_breach_days,
        interest_amount=Decimal(orm_snapshot.interest_amount),
        saved_at=orm_snapshot.saved_at,
    )


def claim_remark_to_domain(orm_remark: ORMClaimRemark) -> domain.ClaimRemark:
    """Convert SQLAlchemy ClaimRemark model to domain ClaimRemark entity."""
    return domain.ClaimRemark(
        claim_id=orm_remark.claim_id,
        remark=orm_remark.remark,
        updated_at=orm_remark.updated_at,
    )


def claim_status_to_domain(orm_status: ORMClaimStatus) -> domain.ClaimStatusEntry:
    """Convert SQLAlchemy ClaimStatus model to domain ClaimStatusEntry entity."""
    return domain.ClaimStatusEntry(
        claim_id=orm_status.claim_id,
        status=domain.ClaimStatus(orm_status.status),
        updated_at=orm_status.updated_at,
    )
