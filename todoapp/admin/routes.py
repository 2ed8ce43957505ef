"""
Admin Routes
"""

import logging

from flask import render_template, redirect, url_for, flash
from flask_login import current_user

from todoapp.admin import admin_bp
from todoapp.admin.decorators import admin_required
from todoapp.errors import Forbidden, NotFound
from todoapp.services import store

logger = logging.getLogger(__name__)


@admin_bp.route('')
@admin_required
def list_users():
    """List every non-admin account."""
    users = store.list_non_admin_users()
    return render_template('admin/users.html', title='Users', users=users)


@admin_bp.route('/delete/<int:user_id>')
@admin_required
def delete_user(user_id):
    """Delete a user and all of their todos."""
    user = store.find_user_by_id(user_id)
    if user is None:
        raise NotFound('User not found.')
    if user.is_admin:
        raise Forbidden('Administrator accounts cannot be deleted here.')

    username = user.username
    store.delete_user(user_id)
    logger.info('Admin %s deleted user %s (id %s)', current_user.username, username, user_id)
    flash(f'User "{username}" deleted.', 'success')
    return redirect(url_for('admin.list_users'))
