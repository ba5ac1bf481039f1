"""
Test suite for expense routes.
Tests cover the expense ledger, the entry form and sample data generation.
"""

import pytest
from decimal import Decimal
from unittest.mock import MagicMock

from models import EXPENSE_CATEGORIES, Kind
from repository import RepositoryError
from tests.conftest import record


class TestExpenseAccess:
    """Test expense page access control."""

    def test_expenses_require_auth(self, client):
        response = client.get('/expenses/')
        assert response.status_code == 302
        assert '/login' in response.headers.get('Location', '')

    def test_expenses_accessible_when_logged_in(self, logged_in_client):
        response = logged_in_client.get('/expenses/')
        assert response.status_code == 200
        assert b'Expense Management' in response.data
        for category in EXPENSE_CATEGORIES:
            assert category.encode() in response.data


class TestExpenseList:
    """Test expense listing."""

    def test_expenses_listed_newest_first(self, logged_in_client, transactions):
        transactions.insert(Kind.EXPENSE, record('2024-01-02', 120, 'Monthly Utilities', 'UTILITIES'))
        transactions.insert(Kind.EXPENSE, record('2024-01-20', 300, 'Plumbing Fix', 'MAINTENANCE'))
        transactions.insert(Kind.INCOME, record('2024-01-21', 900, 'Weekend Rental', 'RENTAL'))

        response = logged_in_client.get('/expenses/')

        assert response.data.index(b'Plumbing Fix') < response.data.index(b'Monthly Utilities')
        assert b'Weekend Rental' not in response.data

    def test_expenses_fetch_failure(self, logged_in_client, transactions, monkeypatch):
        monkeypatch.setattr(transactions, 'fetch_expenses', MagicMock(side_effect=RepositoryError("down")))

        response = logged_in_client.get('/expenses/')

        assert response.status_code == 200
        assert b'Could not load expense entries.' in response.data


class TestAddExpense:
    """Test adding expenses."""

    def test_add_expense_valid(self, logged_in_client, transactions):
        response = logged_in_client.post('/expenses/add', data={
            'date': '2024-01-15',
            'amount': '89.99',
            'description': 'Cleaning Service',
            'category': 'cleaning',
        })

        assert response.status_code == 302
        assert '/expenses' in response.headers.get('Location', '')
        stored = transactions.fetch_expenses()
        assert stored[0].amount == Decimal('89.99')
        assert stored[0].category == 'CLEANING'

    def test_add_expense_income_category_rejected(self, logged_in_client, transactions):
        response = logged_in_client.post('/expenses/add', data={
            'date': '2024-01-15',
            'amount': '10',
            'description': 'Misc',
            'category': 'RENTAL',
        }, follow_redirects=True)

        assert b'Unknown category: RENTAL.' in response.data
        assert transactions.fetch_expenses() == []

    def test_add_expense_non_numeric_amount(self, logged_in_client, transactions):
        response = logged_in_client.post('/expenses/add', data={
            'date': '2024-01-15',
            'amount': 'ten',
            'description': 'Misc',
            'category': 'OTHER',
        }, follow_redirects=True)

        assert b'Amount must be a number.' in response.data
        assert transactions.fetch_expenses() == []


class TestSampleExpenses:
    """Test sample data generation."""

    def test_generate_sample_expenses(self, logged_in_client, transactions):
        logged_in_client.post('/expenses/sample')
        stored = transactions.fetch_expenses()
        assert len(stored) == 5
        assert all(r.category in EXPENSE_CATEGORIES for r in stored)

    def test_generate_sample_failure(self, logged_in_client, transactions, monkeypatch):
        monkeypatch.setattr(transactions, 'insert_many', MagicMock(side_effect=RepositoryError("down")))

        response = logged_in_client.post('/expenses/sample', follow_redirects=True)

        assert b'Could not generate sample data.' in response.data
