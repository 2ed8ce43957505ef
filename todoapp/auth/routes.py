"""
Auth Routes

User registration and login through the strategy registry.
"""

import logging

from flask import render_template, request, redirect, url_for, flash
from flask_login import current_user

from todoapp.auth import auth_bp
from todoapp.auth.strategies import authenticate, establish_identity, end_identity
from todoapp.errors import AuthenticationFailure, ValidationError
from todoapp.services import store
from todoapp.services.passwords import hash_password

logger = logging.getLogger(__name__)


def _registration_form():
    """Read and check the registration form, raising ``ValidationError``."""
    username = request.form.get('username', '').strip()
    password = request.form.get('password', '')
    confirm_password = request.form.get('confirm_password', '')

    errors = []
    if not username:
        errors.append('Username must not be empty.')
    if not password.strip():
        errors.append('Password must not be empty.')
    if not confirm_password.strip():
        errors.append('Confirm Password must not be empty.')
    if errors:
        raise ValidationError(errors)
    if password != confirm_password:
        raise ValidationError('Passwords do not match.')
    return username, password


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """User registration route"""
    if current_user.is_authenticated:
        return redirect(url_for('todos.index'))

    if request.method == 'POST':
        try:
            username, password = _registration_form()
            user_id = store.insert_user(username, hash_password(password))
        except ValidationError as e:
            return render_template('auth/register.html', title='Create User', errors=e.messages,
                                   username=request.form.get('username', '').strip())

        logger.info('Registered user %s (id %s)', username, user_id)
        establish_identity(store.find_user_by_id(user_id))
        return redirect(url_for('todos.index'))

    return render_template('auth/register.html', title='Create User')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login route"""
    if current_user.is_authenticated:
        return redirect(url_for('todos.index'))

    if request.method == 'POST':
        username = request.form.get('username', '')
        try:
            user = authenticate('local', username=username, password=request.form.get('password', ''))
        except ValidationError as e:
            return render_template('auth/login.html', title='Sign In', errors=e.messages, username=username.strip())
        except AuthenticationFailure as e:
            return render_template('auth/login.html', title='Sign In', errors=[e.message], username=username.strip())

        establish_identity(user)
        flash(f'Welcome back, {user.username}!', 'success')
        return redirect(url_for('todos.index'))

    return render_template('auth/login.html', title='Sign In')


@auth_bp.route('/logout')
def logout():
    """Log out and destroy the server-side session"""
    if current_user.is_authenticated:
        logger.info('Logged out user %s', current_user.username)
    end_identity()
    return redirect(url_for('todos.index'))
