"""
Todo Routes

Todos are addressed in URLs by their payload id. Every lookup is scoped
to the current user, so another user's payload id resolves to 404.
"""

from flask import render_template, request, redirect, url_for
from flask_login import current_user

from todoapp.auth.decorators import identity_required
from todoapp.errors import ValidationError
from todoapp.services import todos as todo_service
from todoapp.todos import todos_bp

CHECKED_VALUES = ('on', 'true', '1', 'yes')


def _checked(value):
    return (value or '').strip().lower() in CHECKED_VALUES


@todos_bp.route('/')
def index():
    """Home page: the user's todos, or the anonymous landing view"""
    if not current_user.is_authenticated:
        return render_template('todos/index.html', title='Home')
    todos = todo_service.list_payloads(current_user.id)
    return render_template('todos/index.html', title='Home', todos=todos)


@todos_bp.route('/create', methods=['GET', 'POST'])
@identity_required
def create():
    if request.method == 'POST':
        try:
            todo_service.create_todo(current_user.id, request.form.get('todo'))
        except ValidationError as e:
            return render_template('todos/create.html', title='Create Todo', errors=e.messages)
        return redirect(url_for('todos.index'))

    return render_template('todos/create.html', title='Create Todo')


@todos_bp.route('/edit/', defaults={'payload_id': None}, methods=['GET', 'POST'])
@todos_bp.route('/edit/<payload_id>', methods=['GET', 'POST'])
@identity_required
def edit(payload_id):
    # Missing id -> 400, unknown id -> 404, both via the error handlers
    _, todo = todo_service.find_by_payload_id(current_user.id, payload_id)

    if request.method == 'POST':
        try:
            todo_service.update_by_payload_id(
                current_user.id,
                todo.id,
                request.form.get('todo'),
                _checked(request.form.get('completed')),
            )
        except ValidationError as e:
            return render_template('todos/edit.html', title='Edit Todo', todo=todo, errors=e.messages)
        return redirect(url_for('todos.index'))

    return render_template('todos/edit.html', title='Edit Todo', todo=todo)


@todos_bp.route('/delete/', defaults={'payload_id': None})
@todos_bp.route('/delete/<payload_id>')
@identity_required
def delete(payload_id):
    todo_service.delete_by_payload_id(current_user.id, payload_id)
    return redirect(url_for('todos.index'))
