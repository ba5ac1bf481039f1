from flask import Blueprint, render_template, request, redirect, url_for, current_app, flash
from models import Kind
from repository import RepositoryError
from routes.entries import EntryError, parse_entry
from sample_data import generate_sample_expenses

expenses_bp = Blueprint('expenses', __name__, url_prefix='/expenses')

EXPENSE_FORM_CATEGORIES = [
    ('MAINTENANCE', 'Maintenance'),
    ('UTILITIES', 'Utilities'),
    ('SUPPLIES', 'Supplies'),
    ('CLEANING', 'Cleaning'),
    ('INSURANCE', 'Insurance'),
    ('OTHER', 'Other'),
]


@expenses_bp.route('/')
def index():
    try:
        expenses = current_app.transactions.fetch_expenses()
    except RepositoryError:
        current_app.logger.exception("Error fetching expense entries")
        flash("Could not load expense entries.", "error")
        expenses = []
    return render_template('expenses.html', expenses=expenses, categories=EXPENSE_FORM_CATEGORIES)


@expenses_bp.route('/add', methods=['POST'])
def add_expense():
    try:
        record = parse_entry(request.form, Kind.EXPENSE)
    except EntryError as e:
        flash(str(e), "error")
        return redirect(url_for('expenses.index'))

    try:
        current_app.transactions.insert(Kind.EXPENSE, record)
    except RepositoryError:
        current_app.logger.exception("Error adding expense entry")
        flash("Could not save the expense entry.", "error")
    return redirect(url_for('expenses.index'))


@expenses_bp.route('/sample', methods=['POST'])
def generate_sample():
    records = generate_sample_expenses(current_app.config['SAMPLE_BATCH_SIZE'])
    try:
        current_app.transactions.insert_many(Kind.EXPENSE, records)
    except RepositoryError:
        current_app.logger.exception("Error generating sample expenses")
        flash("Could not generate sample data.", "error")
    return redirect(url_for('expenses.index'))
