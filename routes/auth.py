from flask import Blueprint, render_template, request, redirect, url_for, current_app, session, flash
from werkzeug.security import generate_password_hash, check_password_hash
from repository import RepositoryError

auth_bp = Blueprint('auth', __name__)

MIN_PASSWORD_LENGTH = 8
MAX_NAME_LENGTH = 100


def validate_signup(name, email, password):
    if not name or not email or not password:
        return "All fields are required."
    if len(name) > MAX_NAME_LENGTH:
        return f"Name must be at most {MAX_NAME_LENGTH} characters."
    if '@' not in email or email.startswith('@') or email.endswith('@'):
        return "Please enter a valid email address."
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
    return None


@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    if request.method == 'POST':
        name = request.form.get('name', '').strip()
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        error = validate_signup(name, email, password)
        if error:
            flash(error, "error")
            return redirect(url_for('auth.signup'))

        users = current_app.users
        try:
            if users.find_by_email(email):
                return "Email already exists", 400
            users.create_user(name, email, generate_password_hash(password))
        except RepositoryError:
            current_app.logger.exception("Error creating account for %s", email)
            flash("Could not create your account. Please try again.", "error")
            return redirect(url_for('auth.signup'))

        current_app.logger.info("New account %s", email)
        flash("Account created. Please sign in.", "success")
        return redirect(url_for('auth.login'))

    return render_template('auth/signup.html')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        try:
            user = current_app.users.find_by_email(email)
        except RepositoryError:
            current_app.logger.exception("Error looking up %s", email)
            flash("Sign in is unavailable right now. Please try again.", "error")
            return redirect(url_for('auth.login'))

        if not user or not check_password_hash(user.password_hash, password):
            current_app.logger.info("Failed sign in for %s", email)
            flash("Invalid credentials. Want to sign up?", "error")
            return redirect(url_for('auth.login'))

        session.clear()
        session['user_id'] = user.id
        session['user_name'] = user.name
        session['user_email'] = user.email
        current_app.logger.info("User %s signed in", user.id)

        return redirect(url_for('dashboard.index'))

    return render_template('auth/login.html')


@auth_bp.route('/logout', methods=['POST'])
def logout():
    user_id = session.get('user_id')
    if user_id is not None:
        current_app.dashboard_states.discard(user_id)
    session.clear()
    return redirect(url_for('auth.login'))
