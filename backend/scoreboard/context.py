"""Glue between Flask requests and the scoreboard session contexts."""
from functools import wraps

from flask import current_app, jsonify, request, session


def get_model():
    return current_app.extensions['scoreboard']


def get_registry():
    return current_app.extensions['scoreboard_sessions']


def current_session(create=True):
    """Session context for this browser, opened on first use."""
    registry = get_registry()
    ctx = registry.get(session.get('sid'))
    if ctx is None and create:
        ctx = registry.open()
        session['sid'] = ctx.sid
    return ctx


def end_session():
    get_registry().discard(session.pop('sid', None))


def viewer_required(view):
    """Admins and visitors may read; a session with no identity may not."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        ctx = current_session(create=False)
        if ctx is None or not ctx.can_view:
            return jsonify({'error': 'Login or visitor mode required'}), 401
        return view(*args, **kwargs)
    return wrapped


def json_body():
    """Request JSON as a dict; anything else (missing, invalid, list, scalar) is {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
