import logging
from flask import Flask, redirect, url_for
from flask_wtf.csrf import CSRFProtect
from config import Config
from auth_utils import install_route_guard
from date_ranges import DashboardStateStore
from formatters import format_currency
from routes.auth import auth_bp
from routes.dashboard import dashboard_bp
from routes.expenses import expenses_bp
from routes.income import income_bp

csrf = CSRFProtect()

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    if not app.config.get("SECRET_KEY"):
        import secrets
        app.config["SECRET_KEY"] = secrets.token_hex(32)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    config_class.init_repositories(app)
    app.dashboard_states = DashboardStateStore(app.config['RECENT_TRANSACTIONS_LIMIT'])

    csrf.init_app(app)
    install_route_guard(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(income_bp)
    app.register_blueprint(expenses_bp)

    app.jinja_env.filters['currency'] = format_currency

    @app.route('/')
    def home():
        return redirect(url_for('dashboard.index'))

    return app


if __name__ == '__main__':
    create_app().run(debug=True)
