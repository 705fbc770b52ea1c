from flask import Blueprint, jsonify, current_app


sessions = Blueprint('sessions', __name__)


@sessions.route('', methods=['GET'])
def list_sessions():
    return jsonify(current_app.extensions['chessmatch'].summary())


@sessions.route('/<string:session_id>', methods=['GET'])
def get_session(session_id):
    payload = current_app.extensions['chessmatch'].describe(session_id)
    if payload is None:
        return jsonify({'error': 'Session not found'}), 404
    return jsonify(payload)
