"""
Admin Decorator
"""

from functools import wraps

from flask_login import current_user

from todoapp.errors import Forbidden
from todoapp.extensions import login_manager


def admin_required(f):
    """Decorator to ensure the request is from an authenticated admin.

    - Anonymous visitors are sent to the login page with a flash message
    - Logged-in users without ``is_admin`` get 403
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        if not current_user.is_admin:
            raise Forbidden()
        return f(*args, **kwargs)
    return wrapper
