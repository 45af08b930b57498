"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Mock config module completely before any imports
from enums.currency import Currency
from enums.runtime_environment import RuntimeEnvironment

config_mock = MagicMock()
config_mock.RUNTIME_ENVIRONMENT = RuntimeEnvironment.TEST
config_mock.DB_URL = "sqlite+aiosqlite:///:memory:"  # In-memory test database
config_mock.CURRENCY = Currency.EGP
config_mock.CART_TAX_PERCENT = Decimal("10")
config_mock.CART_BADGE_LIMIT = 99
config_mock.LOG_LEVEL = "INFO"
config_mock.LOG_RETENTION_DAYS = 1
config_mock.LOG_MASK_SECRETS = True
config_mock.SECURITY_HEADERS_ENABLED = False
config_mock.HSTS_ENABLED = False
config_mock.CORS_ALLOWED_ORIGINS = []

sys.modules['config'] = config_mock


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def engine():
    """Create in-memory SQLite database shared by every connection."""
    from models.base import Base
    import models  # noqa: F401  registers all tables

    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create database session."""
    session = Session(engine, expire_on_commit=False)
    yield session
    session.rollback()
    session.close()
