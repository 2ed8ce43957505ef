import pytest

from todoapp import create_app
from todoapp.config import TestConfig
from todoapp.extensions import db
from todoapp.services import store
from todoapp.services.passwords import hash_password
from todoapp.services.todos import payload_index


@pytest.fixture()
def app():
    payload_index.clear()
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def cookie_name(app):
    return app.config['SESSION_COOKIE_NAME']


@pytest.fixture()
def make_user(app):
    """Insert a user directly and return its id."""
    def _make_user(username, password='pass', is_admin=False):
        with app.app_context():
            return store.insert_user(username, hash_password(password), is_admin=is_admin)
    return _make_user


@pytest.fixture()
def register(client):
    def _register(username='alice', password='pw1', confirm_password=None):
        return client.post('/register', data={
            'username': username,
            'password': password,
            'confirm_password': password if confirm_password is None else confirm_password,
        })
    return _register


@pytest.fixture()
def login(client):
    def _login(username, password):
        return client.post('/login', data={'username': username, 'password': password})
    return _login


@pytest.fixture()
def session_user_id(client):
    """Return the user id stored in the client's server-side session."""
    def _session_user_id():
        with client.session_transaction() as sess:
            return sess.get('_user_id')
    return _session_user_id
