import json

import pytest

from todoapp.errors import TodoNotFound, ValidationError
from todoapp.extensions import db
from todoapp.models import Todo
from todoapp.models.todo import TodoPayload
from todoapp.services import store
from todoapp.services.todos import (
    PayloadIndex,
    create_todo,
    delete_by_payload_id,
    find_by_payload_id,
    list_payloads,
    payload_index,
    update_by_payload_id,
)


@pytest.fixture()
def alice(make_user):
    return make_user('alice')


def test_create_then_find(app, alice):
    with app.app_context():
        payload_id = create_todo(alice, '  buy milk ')
        row_id, payload = find_by_payload_id(alice, payload_id)

        assert payload == TodoPayload(id=payload_id, title='buy milk', completed=False)
        # payload id and row id are separate identifiers
        assert payload_id != str(row_id)
        stored = json.loads(db.session.get(Todo, row_id).payload)
        assert stored == {'id': payload_id, 'title': 'buy milk', 'completed': False}


def test_update_keeps_payload_id(app, alice):
    with app.app_context():
        payload_id = create_todo(alice, 'buy milk')
        row_before, _ = find_by_payload_id(alice, payload_id)

        update_by_payload_id(alice, payload_id, 'buy oat milk', True)
        row_after, payload = find_by_payload_id(alice, payload_id)

        assert row_after == row_before
        assert payload == TodoPayload(id=payload_id, title='buy oat milk', completed=True)


def test_delete_then_find_is_not_found(app, alice):
    with app.app_context():
        payload_id = create_todo(alice, 'buy milk')
        delete_by_payload_id(alice, payload_id)

        with pytest.raises(TodoNotFound):
            find_by_payload_id(alice, payload_id)
        assert Todo.query.count() == 0


def test_other_users_todos_are_not_found(app, alice, make_user):
    bob = make_user('bob')
    with app.app_context():
        payload_id = create_todo(alice, 'secret')
        with pytest.raises(TodoNotFound):
            find_by_payload_id(bob, payload_id)
        with pytest.raises(TodoNotFound):
            update_by_payload_id(bob, payload_id, 'mine now', False)
        with pytest.raises(TodoNotFound):
            delete_by_payload_id(bob, payload_id)
        assert find_by_payload_id(alice, payload_id)[1].title == 'secret'


def test_missing_payload_id_is_a_validation_error(app, alice):
    with app.app_context():
        for missing in (None, '', '   '):
            with pytest.raises(ValidationError) as exc:
                find_by_payload_id(alice, missing)
            assert exc.value.messages == ['No Todo ID provided.']


def test_unknown_payload_id_is_not_found_not_created(app, alice):
    with app.app_context():
        with pytest.raises(TodoNotFound):
            update_by_payload_id(alice, 'does-not-exist', 'title', False)
        assert Todo.query.count() == 0


def test_blank_title_is_rejected(app, alice):
    with app.app_context():
        with pytest.raises(ValidationError):
            create_todo(alice, '   ')
        payload_id = create_todo(alice, 'buy milk')
        with pytest.raises(ValidationError):
            update_by_payload_id(alice, payload_id, '', True)
        assert find_by_payload_id(alice, payload_id)[1].title == 'buy milk'


def test_rows_written_elsewhere_are_found(app, alice):
    # a row inserted without going through the index, e.g. by another worker
    with app.app_context():
        create_todo(alice, 'first')
        row_id = store.insert_todo(alice, TodoPayload(id='external', title='second').encode())

        assert find_by_payload_id(alice, 'external') == (row_id, TodoPayload(id='external', title='second'))


def test_stale_index_entry_is_not_trusted(app, alice):
    with app.app_context():
        payload_id = create_todo(alice, 'buy milk')
        row_id, _ = find_by_payload_id(alice, payload_id)
        assert payload_index.lookup(alice, payload_id) == row_id

        # removed behind the index's back
        store.delete_todo(row_id)
        with pytest.raises(TodoNotFound):
            find_by_payload_id(alice, payload_id)
        assert payload_index.lookup(alice, payload_id) is None


def test_undecodable_rows_are_skipped(app, alice):
    with app.app_context():
        store.insert_todo(alice, 'not json at all')
        store.insert_todo(alice, json.dumps({'title': 'no id'}))
        payload_id = create_todo(alice, 'buy milk')

        assert [p.id for p in list_payloads(alice)] == [payload_id]
        assert find_by_payload_id(alice, payload_id)[1].title == 'buy milk'


def test_list_payloads_in_creation_order(app, alice):
    with app.app_context():
        ids = [create_todo(alice, title) for title in ('a', 'b', 'c')]
        assert [p.id for p in list_payloads(alice)] == ids


def test_index_drops_least_recently_used_user():
    index = PayloadIndex(max_users=2)
    index.replace(1, {'a': 10})
    index.replace(2, {'b': 20})
    # touching user 1 makes user 2 the oldest
    assert index.lookup(1, 'a') == 10
    index.add(3, 'c', 30)

    assert len(index) == 2
    assert 2 not in index
    assert index.lookup(1, 'a') == 10
    assert index.lookup(3, 'c') == 30
