"""
Authentication Strategies

A strategy turns submitted credentials into a ``User`` or raises. Route
handlers only ever call ``authenticate(name, ...)``, so adding another way
of logging in means registering another strategy. Knowing who is making a
later request is Flask-Login's job: the session keeps ``User.get_id()``
and the ``user_loader`` in ``create_app`` turns it back into a user.
"""

import logging
import secrets

from flask import session
from flask_login import login_user, logout_user

from todoapp.errors import AuthenticationFailure, ValidationError
from todoapp.services import store
from todoapp.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

_strategies = {}
_dummy_hash = None


class Strategy:
    """Base class for a named way of checking credentials."""
    name = None

    def authenticate(self, **credentials):
        raise NotImplementedError


def _burn_verify(password):
    """Run one bcrypt check so unknown usernames cost as much as bad passwords."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password(secrets.token_hex(16))
    verify_password(password, _dummy_hash)


class LocalStrategy(Strategy):
    """Username and password checked against the users table."""
    name = 'local'

    def authenticate(self, username=None, password=None):
        username = (username or '').strip()
        password = password or ''

        errors = []
        if not username:
            errors.append('Username must not be empty.')
        if not password.strip():
            errors.append('Password must not be empty.')
        if errors:
            raise ValidationError(errors)

        user = store.find_user_by_username(username)
        if user is None:
            _burn_verify(password)
            raise AuthenticationFailure('Username not found.')
        if not verify_password(password, user.password_hash):
            raise AuthenticationFailure('Invalid password.')
        return user


def register_strategy(strategy):
    _strategies[strategy.name] = strategy
    return strategy


def get_strategy(name):
    return _strategies[name]


def authenticate(name, **credentials):
    """Run the named strategy, logging failures with their internal reason."""
    try:
        user = get_strategy(name).authenticate(**credentials)
    except AuthenticationFailure as e:
        logger.info('Login failed (%s strategy) for %r: %s', name, credentials.get('username'), e.reason)
        raise
    logger.info('Login succeeded (%s strategy) for %s', name, user.username)
    return user


def establish_identity(user):
    """Bind ``user`` to the current browser under a freshly issued session id."""
    session.regenerate()
    login_user(user)


def end_identity():
    logout_user()
    session.destroy()


register_strategy(LocalStrategy())
