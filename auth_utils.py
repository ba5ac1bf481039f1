from typing import Optional
from flask import session, redirect, request

PROTECTED_PREFIXES = ('/dashboard', '/income', '/expenses')
AUTH_PREFIXES = ('/login', '/signup')

LOGIN_PATH = '/login'
DASHBOARD_PATH = '/dashboard'


def guard_redirect(path: str, has_session: bool) -> Optional[str]:
    """
    Where a request for `path` must be sent instead, or None to let it through.

    Protected pages need a session; the login and signup pages are only for
    visitors without one.
    """
    if not has_session and path.startswith(PROTECTED_PREFIXES):
        return LOGIN_PATH
    if has_session and path.startswith(AUTH_PREFIXES):
        return DASHBOARD_PATH
    return None


def has_session() -> bool:
    return 'user_id' in session


def install_route_guard(app):
    @app.before_request
    def enforce_session():
        target = guard_redirect(request.path, has_session())
        if target is not None:
            return redirect(target)
        return None
