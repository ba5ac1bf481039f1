"""
Chalet Manager Test Suite

- test_reporting.py: Totals, recent activity feed and monthly buckets
- test_date_ranges.py: Date range presets, parsing and dashboard state
- test_repository.py: MySQL and in-memory repositories
- test_formatters.py: Currency formatting
- test_sample_data.py: Sample record generation
- test_auth.py: Signup, login, logout
- test_dashboard.py: Dashboard view, range and preset handling
- test_income.py / test_expenses.py: Ledgers and entry forms
- test_security.py: Route guards and CSRF protection

Run all tests:
    pytest tests/

Run with verbose output:
    pytest tests/ -v
"""
