from flask import Blueprint, render_template, request, redirect, url_for, current_app, flash
from models import Kind
from repository import RepositoryError
from routes.entries import EntryError, parse_entry
from sample_data import generate_sample_income

income_bp = Blueprint('income', __name__, url_prefix='/income')

INCOME_FORM_CATEGORIES = [('RENTAL', 'Rental'), ('SERVICE', 'Service'), ('OTHER', 'Other')]


@income_bp.route('/')
def index():
    try:
        incomes = current_app.transactions.fetch_income()
    except RepositoryError:
        current_app.logger.exception("Error fetching income entries")
        flash("Could not load income entries.", "error")
        incomes = []
    return render_template('income.html', incomes=incomes, categories=INCOME_FORM_CATEGORIES)


@income_bp.route('/add', methods=['POST'])
def add_income():
    try:
        record = parse_entry(request.form, Kind.INCOME)
    except EntryError as e:
        flash(str(e), "error")
        return redirect(url_for('income.index'))

    try:
        current_app.transactions.insert(Kind.INCOME, record)
    except RepositoryError:
        current_app.logger.exception("Error adding income entry")
        flash("Could not save the income entry.", "error")
    return redirect(url_for('income.index'))


@income_bp.route('/sample', methods=['POST'])
def generate_sample():
    records = generate_sample_income(current_app.config['SAMPLE_BATCH_SIZE'])
    try:
        current_app.transactions.insert_many(Kind.INCOME, records)
    except RepositoryError:
        current_app.logger.exception("Error generating sample income")
        flash("Could not generate sample data.", "error")
    return redirect(url_for('income.index'))
