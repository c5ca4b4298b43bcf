"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..exceptions import GameInProgressError, GameOverError, InvalidGuessError
from ..services.game_service import get_game_service
from ..utils.game_logger import get_game_logger

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _error_response(action: str, error: Exception, status: int):
    game_logger = get_game_logger()
    error_response = {
        'success': False,
        'error': str(error)
    }
    if status >= 500:
        game_logger.log_error(request, error, action)
    game_logger.log_server_response(request, action, False, error_response)
    return jsonify(error_response), status


@game_bp.route('/game', methods=['GET'])
def get_state():
    """Get the current game state."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        get_game_logger().log_user_action(request, 'get_state')

        response_data = {
            'success': True,
            'state': game_service.current_session().to_view()
        }
        get_game_logger().log_server_response(request, 'get_state', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('get_state', e, 500)


@game_bp.route('/game/keys', methods=['POST'])
def press_keys():
    """Feed on-screen or physical keyboard keys to the game."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        keys = data.get('keys')
        if not isinstance(keys, list):
            return _error_response('press_keys', InvalidGuessError('A list of keys is required'), 400)

        get_game_logger().log_user_action(request, 'press_keys', key_count=len(keys))

        results = game_service.press_keys(keys)
        notices = [result.notice for result in results if result.notice]

        response_data = {
            'success': True,
            'notices': notices,
            'state': game_service.current_session().to_view()
        }
        get_game_logger().log_server_response(request, 'press_keys', True, response_data, notices=notices)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('press_keys', e, 500)


@game_bp.route('/game/guess', methods=['POST'])
def make_guess():
    """Submit a whole word as a guess."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True)
        if not data or 'guess' not in data:
            return _error_response('submit_guess', InvalidGuessError('Guess is required'), 400)

        guess = data['guess']
        get_game_logger().log_user_action(request, 'submit_guess', guess_length=len(str(guess)))

        try:
            result = game_service.submit_word(guess)
        except (InvalidGuessError, GameOverError) as e:
            return _error_response('submit_guess', e, 400)

        response_data = {
            'success': True,
            'state': result.session.to_view()
        }
        get_game_logger().log_server_response(
            request, 'submit_guess', True, response_data,
            round=len(result.session.guesses), game_over=result.session.is_over
        )
        return jsonify(response_data)

    except Exception as e:
        return _error_response('submit_guess', e, 500)


@game_bp.route('/game/random', methods=['POST'])
def start_random():
    """Start a random (unrecorded) game once the current one is over."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        get_game_logger().log_user_action(request, 'start_random')

        try:
            result = game_service.start_random()
        except GameInProgressError as e:
            return _error_response('start_random', e, 400)

        response_data = {
            'success': True,
            'state': result.session.to_view()
        }
        get_game_logger().log_server_response(request, 'start_random', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('start_random', e, 500)


@game_bp.route('/stats', methods=['GET'])
def get_stats():
    """Scoreboard statistics from the daily game history."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        get_game_logger().log_user_action(request, 'get_stats')

        response_data = {
            'success': True,
            'stats': game_service.get_scoreboard().to_dict()
        }
        get_game_logger().log_server_response(request, 'get_stats', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('get_stats', e, 500)


@game_bp.route('/share', methods=['GET'])
def get_share_text():
    """Share text for the finished game."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        get_game_logger().log_user_action(request, 'share')

        try:
            text = game_service.get_share_text()
        except GameInProgressError as e:
            return _error_response('share', e, 400)

        response_data = {
            'success': True,
            'text': text
        }
        get_game_logger().log_server_response(request, 'share', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('share', e, 500)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()
        game_logger = get_game_logger()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'game_available': game_service is not None,
            'game_status': game_service.current_session().state.value if game_service else None,
            'log_stats': game_logger.get_log_stats()
        }
        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        get_game_logger().log_error(request, e, 'health_check')
        return jsonify({'status': 'error', 'error': str(e)}), 500
