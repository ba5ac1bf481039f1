"""
Shared pytest fixtures for Chalet Manager tests.
"""

import pytest
import os
import sys
from datetime import date
from decimal import Decimal

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from models import NewRecord
from repository import InMemoryTransactionRepository, InMemoryUserRepository


class TestConfig:
    """Test configuration backed by in-memory repositories instead of MySQL."""
    SECRET_KEY = 'test-secret-key-for-testing-only'
    TESTING = True
    WTF_CSRF_ENABLED = True
    SERVER_NAME = 'localhost'
    LOG_LEVEL = 'DEBUG'
    RECENT_TRANSACTIONS_LIMIT = 10
    SAMPLE_BATCH_SIZE = 5
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    @staticmethod
    def init_repositories(app):
        """No real MySQL needed."""
        app.transactions = InMemoryTransactionRepository()
        app.users = InMemoryUserRepository()


def record(day, amount, description='Entry', category='OTHER'):
    """Shorthand for a NewRecord dated `day` (ISO string)."""
    return NewRecord(
        date=date.fromisoformat(day),
        amount=Decimal(str(amount)),
        description=description,
        category=category,
    )


def login_session(client, user_id=1, user_name='Test User', user_email='test@example.com'):
    """Helper to set up a logged-in session."""
    with client.session_transaction() as sess:
        sess['user_id'] = user_id
        sess['user_name'] = user_name
        sess['user_email'] = user_email


@pytest.fixture
def app():
    """Create application for testing."""
    from app import create_app
    application = create_app(config_class=TestConfig)
    application.config['WTF_CSRF_ENABLED'] = True
    yield application


@pytest.fixture
def app_no_csrf():
    """Create application for testing without CSRF protection."""
    from app import create_app
    application = create_app(config_class=TestConfig)
    application.config['WTF_CSRF_ENABLED'] = False
    yield application


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def client_no_csrf(app_no_csrf):
    """Create test client without CSRF."""
    return app_no_csrf.test_client()


@pytest.fixture
def logged_in_client(client_no_csrf):
    """Client with a logged-in session."""
    login_session(client_no_csrf)
    return client_no_csrf


@pytest.fixture
def transactions(app_no_csrf):
    """The in-memory transaction repository behind `app_no_csrf`."""
    return app_no_csrf.transactions
