"""
Flask REST API for TapCalc
Drives calculator sessions and the theme preference over JSON
"""
import threading
from collections import OrderedDict
from flask import Flask, jsonify, request
from flask_cors import CORS
from calculator import CalculatorEngine, Clear, event_from_key
from preferences import PreferenceStore
import config


class BadRequest(Exception):
    """Client sent something the API cannot use"""


class SessionRegistry:
    """Calculator engines by session id, least recently used dropped first"""

    def __init__(self, max_sessions=config.MAX_SESSIONS):
        self.max_sessions = max_sessions
        self._engines = OrderedDict()
        self._lock = threading.Lock()

    def run(self, session_id, action):
        """Call action(engine) while holding the registry lock"""
        with self._lock:
            engine = self._engines.get(session_id)
            if engine is None:
                engine = self._engines[session_id] = CalculatorEngine()
                while len(self._engines) > self.max_sessions:
                    self._engines.popitem(last=False)
            else:
                self._engines.move_to_end(session_id)
            return action(engine)

    def snapshot(self, session_id):
        """Current state; an unknown id reads as a fresh calculator and is not stored"""
        with self._lock:
            engine = self._engines.get(session_id)
            if engine is None:
                return CalculatorEngine().state
            self._engines.move_to_end(session_id)
            return engine.state

    def reset(self, session_id):
        with self._lock:
            engine = self._engines.get(session_id)
            if engine is None:
                return CalculatorEngine().state
            return engine.apply(Clear())

    def drop(self, session_id):
        with self._lock:
            return self._engines.pop(session_id, None) is not None

    def __contains__(self, session_id):
        with self._lock:
            return session_id in self._engines

    def __len__(self):
        with self._lock:
            return len(self._engines)


def _session_id(payload=None):
    if payload is not None and payload.get('session') is not None:
        session_id = payload['session']
    else:
        session_id = request.args.get('session', config.DEFAULT_SESSION)
    if not isinstance(session_id, str) or not session_id:
        raise BadRequest("session must be a non-empty string")
    return session_id


def _json_body():
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise BadRequest("request body must be a JSON object")
    return payload


def _apply_all(events):
    def action(engine):
        state = engine.state
        for event in events:
            state = engine.apply(event)
        return state
    return action


def create_app(preferences=None, max_sessions=config.MAX_SESSIONS):
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes

    # Initialize components
    prefs = preferences if preferences is not None else PreferenceStore()
    sessions = SessionRegistry(max_sessions)
    app.config['PREFERENCES'] = prefs
    app.config['SESSIONS'] = sessions

    @app.errorhandler(BadRequest)
    def handle_bad_request(e):
        return jsonify({'success': False, 'error': str(e)}), 400

    @app.route('/api')
    def api_info():
        """API information page"""
        return """
        <html>
        <head><title>TapCalc API</title></head>
        <body style="font-family: Arial; padding: 40px;">
            <h1>TapCalc API Server</h1>
            <h2>Available Endpoints:</h2>
            <ul>
                <li>GET /api/state?session=ID - Current display</li>
                <li>POST /api/press - Press one key ({"key": "7"}) or several ({"keys": [...]})</li>
                <li>POST /api/clear - All clear</li>
                <li>DELETE /api/sessions/ID - Forget a session</li>
                <li>GET, POST /api/preferences/theme - Light/dark preference</li>
            </ul>
        </body>
        </html>
        """

    @app.route('/api/state')
    def get_state():
        """Get the display of a calculator session"""
        session_id = _session_id()
        try:
            state = sessions.snapshot(session_id)
            return jsonify({'success': True, 'session': session_id, 'data': state.to_dict()})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/press', methods=['POST'])
    def press():
        """Apply one or more keypad presses"""
        payload = _json_body()
        session_id = _session_id(payload)
        if 'keys' in payload:
            keys = payload['keys']
            if not isinstance(keys, list):
                raise BadRequest("keys must be a list")
        elif 'key' in payload:
            keys = [payload['key']]
        else:
            raise BadRequest("missing key")

        # Reject the whole batch before touching the engine
        try:
            events = [event_from_key(key) for key in keys]
        except ValueError as e:
            raise BadRequest(str(e))

        try:
            state = sessions.run(session_id, _apply_all(events))
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500
        return jsonify({'success': True, 'session': session_id, 'data': state.to_dict()})

    @app.route('/api/clear', methods=['POST'])
    def clear():
        """All clear"""
        session_id = _session_id(_json_body())
        try:
            state = sessions.reset(session_id)
            return jsonify({'success': True, 'session': session_id, 'data': state.to_dict()})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/sessions/<session_id>', methods=['DELETE'])
    def drop_session(session_id):
        try:
            return jsonify({'success': True, 'data': {'dropped': sessions.drop(session_id)}})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/preferences/theme', methods=['GET'])
    def get_theme():
        """Get the saved light/dark preference"""
        try:
            return jsonify({'success': True, 'data': {'dark': prefs.is_dark_mode()}})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/preferences/theme', methods=['POST'])
    def set_theme():
        """Save the light/dark preference"""
        payload = _json_body()
        dark = payload.get('dark')
        if not isinstance(dark, bool):
            raise BadRequest("dark must be true or false")
        try:
            prefs.set_dark_mode(dark)
            return jsonify({'success': True, 'data': {'dark': prefs.is_dark_mode()}})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    return app


if __name__ == '__main__':
    print("\n" + "="*60)
    print("TapCalc API Server")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"Access from this device: http://localhost:{config.WEB_PORT}/api")
    if config.WEB_HOST == '0.0.0.0':
        print(f"Access from network: http://<your-ip>:{config.WEB_PORT}/api")
    print("="*60 + "\n")

    create_app().run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)
