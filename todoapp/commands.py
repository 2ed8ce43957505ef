"""
CLI Commands

Registered on ``app.cli``; run as ``flask --app app purge-sessions`` etc.
"""

import click

from todoapp.errors import DuplicateUsername
from todoapp.services import store
from todoapp.services.passwords import hash_password
from todoapp.sessions import purge_expired_sessions


def register_commands(app):

    @app.cli.command('purge-sessions')
    def purge_sessions_command():
        """Delete expired server-side sessions."""
        removed = purge_expired_sessions()
        click.echo(f'Removed {removed} expired session(s)')

    @app.cli.command('create-admin')
    @click.argument('username')
    @click.password_option()
    def create_admin_command(username, password):
        """Create an administrator account."""
        username = username.strip()
        if not username:
            raise click.BadParameter('Username must not be empty.')
        if not password.strip():
            raise click.BadParameter('Password must not be empty.')
        try:
            user_id = store.insert_user(username, hash_password(password), is_admin=True)
        except DuplicateUsername:
            raise click.ClickException(f'Username {username} is already taken')
        click.echo(f'Created admin {username} (id {user_id})')
