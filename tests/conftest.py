"""Shared pytest fixtures for tradeclaims tests."""

import tempfile
import os
from pathlib import Path
import pytest

from tradeclaims.database.sqlalchemy_db import SQLAlchemyDatabase
from tradeclaims.domain.claims import ClaimService
from tradeclaims.domain.import_format import ImportFormatService
from tradeclaims.domain.rates import RateService
from tradeclaims.domain.trade import TradeService
from tradeclaims.domain.trade_import import TradeImportService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = SQLAlchemyDatabase.for_sqlite_file(db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def trade_service(temp_db):
    """Create a TradeService with a temporary database."""
    return TradeService(temp_db)


@pytest.fixture
def import_format_service(temp_db):
    """Create an ImportFormatService with a temporary database."""
    return ImportFormatService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a TradeImportService with a temporary database."""
    return TradeImportService(temp_db)


@pytest.fixture
def rate_service(temp_db):
    """Create a RateService with a temporary database."""
    return RateService(temp_db)


@pytest.fixture
def claim_service(temp_db):
    """Create a ClaimService with a temporary database."""
    return ClaimService(temp_db)


@pytest.fixture
def sample_format(import_format_service):
    """Create a sample equity import format with mappings for broker_blotter.csv."""
    format_id = import_format_service.create_format(name="Broker Blotter", data_type="equity")

    import_format_service.add_mapping(format_id, "Ref", "trade_id")
    import_format_service.add_mapping(format_id, "Broker", "counterparty")
    import_format_service.add_mapping(format_id, "VD", "value_date")
    import_format_service.add_mapping(format_id, "SD", "settlement_date")
    import_format_service.add_mapping(format_id, "Gross", "notional_amount")
    import_format_service.add_mapping(format_id, "Result", "pnl_calculated")
    import_format_service.add_mapping(format_id, "Conf", "confirmation_status")
    import_format_service.add_mapping(format_id, "Costs", "cost_allocation_status")

    return import_format_service.get_format(format_id)


@pytest.fixture
def imported_trades(import_service, fixtures_dir):
    """Import the sample FX blotter and return the import result."""
    return import_service.import_file(str(fixtures_dir / "sample_trades.csv"))


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
