from datetime import date
from flask import Blueprint, render_template, request, redirect, url_for, current_app, session, flash, abort
from date_ranges import PRESETS, PRESET_LABELS, parse_date, resolve_preset
from models import InvalidDateRange
from repository import RepositoryError

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/dashboard')


def current_state():
    return current_app.dashboard_states.get(session['user_id'], date.today())


@dashboard_bp.route('/')
def index():
    state = current_state()
    if not state.refresh(current_app.transactions):
        flash("Could not load dashboard data. Showing the last loaded figures.", "error")

    return render_template("dashboard.html",
        summary=state.summary,
        date_range=state.date_range,
        presets=PRESET_LABELS,
        today=date.today()
    )


@dashboard_bp.route('/range', methods=['POST'])
def set_range():
    state = current_state()
    try:
        start_date = parse_date(request.form.get('start_date', ''))
        end_date = parse_date(request.form.get('end_date', ''))
        state.set_range(start_date, end_date)
    except InvalidDateRange as e:
        current_app.logger.info("Rejected date range %s..%s",
                                request.form.get('start_date'), request.form.get('end_date'))
        flash(str(e), "error")
    return redirect(url_for('dashboard.index'))


@dashboard_bp.route('/preset/<preset>', methods=['POST'])
def apply_preset(preset):
    if preset not in PRESETS:
        abort(404)

    state = current_state()
    try:
        date_range = resolve_preset(preset, date.today(), current_app.transactions)
    except RepositoryError:
        current_app.logger.exception("Error finding oldest record")
        flash("Could not find the oldest record. The date range was not changed.", "error")
        return redirect(url_for('dashboard.index'))

    state.set_range(date_range.start_date, date_range.end_date)
    return redirect(url_for('dashboard.index'))
