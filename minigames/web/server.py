"""
Web Game Server
===============

Flask + SocketIO bridge between the game engines and a browser
presentation layer.

Features:
    - REST API for game metadata, current snapshots and best scores
    - WebSocket 'input' events delivered to the engines as Actions
    - Snapshots pushed to every client in the game's room after each change
    - One RealTimeClock shared by all engines, pumped by a background task

The engines are single-threaded; every access from a socket handler or
the pump task goes through one lock.

Usage:
    >>> from minigames.web import GameServer
    >>> server = GameServer(port=5000)
    >>> server.run()
"""

import base64
import os
import threading
from typing import Any, Dict, Optional

import numpy as np

try:
    # Suppress werkzeug logging BEFORE importing Flask
    import logging
    logging.getLogger('werkzeug').setLevel(logging.ERROR)

    from flask import Flask, jsonify
    from flask_socketio import SocketIO, emit, join_room, leave_room
    FLASK_AVAILABLE = True
except ImportError:
    FLASK_AVAILABLE = False

from ..config import Config
from ..core.actions import Action
from ..core.scheduler import RealTimeClock
from ..core.scores import JsonScoreStore, ScoreStore
from ..game import BaseGame, create_game, get_all_game_info, list_games
from ..utils.logger import get_logger

# Module logger
_logger = get_logger(__name__)


def _make_json_safe(obj: Any) -> Any:
    """
    Convert NumPy types to native Python types for JSON serialization.

    Recursively processes dictionaries, lists and tuples.
    """
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {k: _make_json_safe(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_make_json_safe(v) for v in obj]
    return obj


class GameServer:
    """
    Serves every registered game to browser clients.

    Socket events (client -> server):
        join     {game}                 - Subscribe to a game's snapshots
        leave    {game}                 - Unsubscribe
        input    {game, type, value}    - Deliver an action; ack {accepted}
        confirm  {game, accept}         - Answer a pending difficulty change

    Socket events (server -> client):
        games    registry info          - On connect
        state    snapshot               - After every accepted change
        error    {message}              - Malformed request or persistence failure

    Example:
        >>> server = GameServer(port=5000)
        >>> server.start()   # background thread
        >>> server.stop()
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        score_store: Optional[ScoreStore] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ):
        if not FLASK_AVAILABLE:
            raise RuntimeError("Flask is not installed. Run: pip install flask flask-socketio")

        self.config = config or Config()
        self.host = host or self.config.WEB_HOST
        self.port = port or self.config.WEB_PORT
        self.score_store = score_store or JsonScoreStore(self.config.SCORE_PATH)

        self.clock = RealTimeClock()
        self._lock = threading.RLock()
        self.games: Dict[str, BaseGame] = {
            key: create_game(key, config=self.config, clock=self.clock,
                             score_store=self.score_store)
            for key in list_games()
        }

        self.app = Flask(__name__)
        # Generate secure random secret key (not hardcoded for security)
        self.app.config['SECRET_KEY'] = base64.b64encode(os.urandom(24)).decode('utf-8')
        self.socketio = SocketIO(self.app, cors_allowed_origins="*", async_mode='threading')

        self._register_routes()
        self._register_socket_events()
        for key, game in self.games.items():
            game.subscribe(self._broadcaster(key))
            game.on_error(self._error_broadcaster(key))

        self._server_thread: Optional[threading.Thread] = None
        self._running = False

    # =========================================================================
    # ENGINE ACCESS
    # =========================================================================

    def pump(self) -> int:
        """Fire every timer that has come due on the shared clock."""
        with self._lock:
            return self.clock.pump()

    def _pump_loop(self) -> None:
        interval = self.config.WEB_PUMP_INTERVAL_MS / 1000.0
        while self._running:
            self.pump()
            self.socketio.sleep(interval)

    def _broadcaster(self, key: str):
        def broadcast(snapshot: Dict[str, Any]) -> None:
            self.socketio.emit('state', _make_json_safe(snapshot), to=key)
        return broadcast

    def _error_broadcaster(self, key: str):
        def broadcast(message: str) -> None:
            self.socketio.emit('error', {'game': key, 'message': message}, to=key)
        return broadcast

    def _game_for(self, data: Any) -> Optional[BaseGame]:
        if not isinstance(data, dict):
            return None
        return self.games.get(str(data.get('game', '')))

    # =========================================================================
    # ROUTES
    # =========================================================================

    def _register_routes(self) -> None:
        """Register Flask routes."""

        @self.app.route('/api/games')
        def api_games():
            return jsonify(get_all_game_info())

        @self.app.route('/api/games/<game>/state')
        def api_game_state(game):
            engine = self.games.get(game)
            if engine is None:
                return jsonify({'error': f'Unknown game: {game}'}), 404
            with self._lock:
                return jsonify(_make_json_safe(engine.snapshot()))

        @self.app.route('/api/scores/<game>', methods=['GET'])
        def api_scores(game):
            engine = self.games.get(game)
            if engine is None:
                return jsonify({'error': f'Unknown game: {game}'}), 404
            with self._lock:
                return jsonify(engine.record.to_dict())

        @self.app.route('/api/scores/<game>', methods=['DELETE'])
        def api_reset_scores(game):
            engine = self.games.get(game)
            if engine is None:
                return jsonify({'error': f'Unknown game: {game}'}), 404
            with self._lock:
                engine.reset_scores()
                return jsonify(engine.record.to_dict())

    def _register_socket_events(self) -> None:
        """Register SocketIO events."""

        @self.socketio.on('connect')
        def handle_connect():
            emit('games', get_all_game_info())

        @self.socketio.on('join')
        def handle_join(data):
            engine = self._game_for(data)
            if engine is None:
                emit('error', {'message': 'Unknown game'})
                return
            join_room(engine.GAME_KEY)
            with self._lock:
                emit('state', _make_json_safe(engine.snapshot()))

        @self.socketio.on('leave')
        def handle_leave(data):
            engine = self._game_for(data)
            if engine is not None:
                leave_room(engine.GAME_KEY)

        @self.socketio.on('input')
        def handle_input(data):
            engine = self._game_for(data)
            if engine is None:
                emit('error', {'message': 'Unknown game'})
                return {'accepted': False}
            try:
                action = Action.from_dict(data)
            except ValueError as e:
                emit('error', {'game': engine.GAME_KEY, 'message': str(e)})
                return {'accepted': False}
            with self._lock:
                accepted = engine.on_input(action)
            return {'accepted': accepted}

        @self.socketio.on('confirm')
        def handle_confirm(data):
            engine = self._game_for(data)
            if engine is None:
                emit('error', {'message': 'Unknown game'})
                return {'applied': False}
            with self._lock:
                applied = engine.confirm_destructive_change(bool(data.get('accept')))
            return {'applied': applied}

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self) -> None:
        """Serve in the current thread until interrupted."""
        self._running = True
        self.socketio.start_background_task(self._pump_loop)
        _logger.info(f"Arcade server running at http://{self.host}:{self.port}")
        try:
            self.socketio.run(
                self.app,
                host=self.host,
                port=self.port,
                debug=False,
                use_reloader=False,
                log_output=False,
                allow_unsafe_werkzeug=True,
            )
        finally:
            self._running = False

    def start(self) -> None:
        """Start the server in a background thread."""
        if self._running:
            return

        def run_server():
            try:
                self.run()
            except OSError as e:
                _logger.error(f"Failed to start arcade server on port {self.port}: {e}")
                _logger.error(f"Port {self.port} may already be in use. Try a different port with --port")

        self._server_thread = threading.Thread(target=run_server, daemon=True)
        self._server_thread.start()

    def stop(self) -> None:
        """Stop pumping, cancel all game timers and release the port."""
        self._running = False
        with self._lock:
            for game in self.games.values():
                game.timers.cancel_all()
        try:
            self.socketio.stop()
        except RuntimeError as e:
            # Only valid from inside a request; the daemon thread dies with the process
            _logger.debug(f"Server stop (best effort): {e}")
