import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ...permissions import can_create
from ...client import APIError
from ..forms import EventForm
from ..views import current_sid, current_view, get_registry

logger = logging.getLogger(__name__)

# Create the blueprint
bp = Blueprint('events', __name__)

def render_event_list(view, status=200):
    state = view.state
    return render_template(
        'evento.html',
        state=state,
        rows=view.rows(),
        can_create=can_create(state.user)
    ), status

@bp.route('/evento')
def evento():
    """Mount a fresh event list view and render it."""
    view = get_registry().new_view(current_sid())
    view.mount()
    return render_event_list(view)

@bp.route('/evento/menu', methods=['POST'])
def toggle_menu():
    view = current_view()
    view.toggle_menu()
    return render_event_list(view)

@bp.route('/evento/<int:event_id>/apply', methods=['POST'])
def apply(event_id):
    view = current_view()
    result = view.apply(event_id)
    return render_event_list(view, 200 if result.performed else 403)

@bp.route('/evento/<int:event_id>/delete', methods=['POST'])
def delete(event_id):
    view = current_view()
    result = view.delete(event_id)
    return render_event_list(view, 200 if result.performed else 403)

@bp.route('/evento/<int:event_id>/edit', methods=['POST'])
def edit(event_id):
    view = current_view()
    if view.edit(event_id) is None:
        return render_event_list(view, 403)
    return redirect(url_for('events.create', event_id=event_id))

@bp.route('/create', methods=['GET', 'POST'])
def create():
    """Create a new event, or edit one when an event id is given."""
    view = current_view()
    if not can_create(view.state.user):
        return render_event_list(view, 403)

    event_id = request.values.get('event_id', type=int)
    event = None
    if event_id is not None:
        event = view.edit(event_id)
        if event is None:
            return render_event_list(view, 403)

    if request.method == 'GET':
        form = EventForm.from_event(event) if event else EventForm()
        return render_template('create.html', form=form, event=event, errors={})

    form = EventForm.from_mapping(request.form)
    errors = form.validate()
    if errors:
        return render_template('create.html', form=form, event=event, errors=errors), 400

    client = view.client
    try:
        if event is not None:
            client.update_event(event.id, form.to_payload())
        else:
            client.create_event(form.to_payload())
    except APIError as e:
        logger.error(f"Operation failed: {e}")
        flash(f"Failed to {'update' if event else 'create'} event", 'error')
        return render_template('create.html', form=form, event=event, errors={}), 502

    # The list is re-fetched on the next mount
    return redirect(url_for('events.evento'))
