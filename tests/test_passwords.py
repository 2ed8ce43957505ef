import pytest

from todoapp.errors import StoreFailure
from todoapp.services.passwords import hash_password, verify_password


def test_hash_is_salted_and_verifies(app):
    with app.app_context():
        first = hash_password('pw1')
        second = hash_password('pw1')
        assert first != second
        assert 'pw1' not in first
        assert verify_password('pw1', first)
        assert verify_password('pw1', second)
        assert not verify_password('pw2', first)


def test_default_work_factor_is_ten(app):
    app.config['BCRYPT_ROUNDS'] = 10
    with app.app_context():
        assert hash_password('pw1').startswith('$2b$10$')


def test_empty_inputs(app):
    with app.app_context():
        with pytest.raises(ValueError):
            hash_password('')
        assert verify_password('', hash_password('pw1')) is False


def test_empty_stored_hash_is_a_store_failure(app):
    with app.app_context():
        with pytest.raises(StoreFailure):
            verify_password('pw1', '')


def test_malformed_stored_hash_is_a_store_failure(app):
    with app.app_context():
        with pytest.raises(StoreFailure):
            verify_password('pw1', 'not-a-bcrypt-hash')


def test_long_passwords_are_accepted(app):
    long_password = 'x' * 100
    with app.app_context():
        assert verify_password(long_password, hash_password(long_password))
