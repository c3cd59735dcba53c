from flask import Blueprint, jsonify, request, current_app
from repguess.exceptions import InvalidInput
from repguess.services.games.engine import get_engine
from repguess.services.games.scoring import guess_from_payload, payload_dict


game = Blueprint('game', __name__)


@game.route('/state', methods=['GET'])
def get_state():
    return jsonify(get_engine().snapshot())


@game.route('/difficulty', methods=['POST'])
def select_difficulty():
    data = payload_dict(request.get_json(silent=True))
    label = data.get('difficulty')
    if not label:
        return jsonify({'error': 'difficulty is required'}), 400
    try:
        snapshot = get_engine().select_difficulty(label)
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    return jsonify(snapshot)


@game.route('/guess', methods=['POST'])
def submit_guess():
    raw = guess_from_payload(request.get_json(silent=True))
    try:
        snapshot = get_engine().submit_guess(raw)
    except InvalidInput as exc:
        current_app.logger.info(f"[invalid-input] raw={exc.raw!r}")
        return jsonify(exc.to_dict()), 400
    return jsonify(snapshot)


@game.route('/input', methods=['POST'])
def update_input():
    data = payload_dict(request.get_json(silent=True))
    return jsonify(get_engine().update_input(data.get('text', '')))


@game.route('/reset', methods=['POST'])
def reset_game():
    data = payload_dict(request.get_json(silent=True))
    try:
        snapshot = get_engine().reset_game(data.get('difficulty'))
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    return jsonify(snapshot)


@game.route('/tick', methods=['POST'])
def tick():
    # For renderers that drive the countdown themselves instead of the server clock
    return jsonify(get_engine().tick())
