from flask import Blueprint, jsonify
from repguess.models import Difficulty

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Rep Guess game server!'})


@main.route('/health')
def health():
    return jsonify({'status': 'healthy'})


@main.route('/difficulties')
def list_difficulties():
    return jsonify({d.label: d.to_dict() for d in Difficulty})
