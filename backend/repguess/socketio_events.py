from flask import current_app
from flask_socketio import emit
from repguess import socketio
from repguess.exceptions import InvalidInput
from repguess.services.games.engine import get_engine
from repguess.services.games.scoring import guess_from_payload, payload_dict

NAMESPACE = '/ws'


def broadcast_state(snapshot):
    """Push a state snapshot to every connected renderer."""
    # socketio.emit works from background tasks too (clock, delayed restart)
    socketio.emit('state_update', snapshot, namespace=NAMESPACE)


def handle_connect():
    emit('connected', {'message': f'Connected to {NAMESPACE}'})
    emit('state_update', get_engine().snapshot())


def handle_disconnect(*_):
    pass


def handle_select_difficulty(data=None):
    label = payload_dict(data).get('difficulty')
    try:
        get_engine().select_difficulty(label)
    except ValueError as exc:
        emit('error', {'message': str(exc)})


def handle_submit_guess(data=None):
    raw = guess_from_payload(data)
    try:
        get_engine().submit_guess(raw)
    except InvalidInput as exc:
        current_app.logger.info(f"[invalid-input] raw={exc.raw!r}")
        emit('invalid_input', {'title': exc.title, 'message': exc.message})


def handle_update_input(data=None):
    get_engine().update_input(payload_dict(data).get('text', ''))


def handle_reset_game(data=None):
    label = payload_dict(data).get('difficulty')
    try:
        get_engine().reset_game(label)
    except ValueError as exc:
        emit('error', {'message': str(exc)})


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = [NAMESPACE, '/'] if testing else [NAMESPACE]
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
        socketio.on_event('select_difficulty', handle_select_difficulty, namespace=namespace)
        socketio.on_event('submit_guess', handle_submit_guess, namespace=namespace)
        socketio.on_event('update_input', handle_update_input, namespace=namespace)
        socketio.on_event('reset_game', handle_reset_game, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
