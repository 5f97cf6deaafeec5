"""
REST API for quadnav

HTTP endpoints to start, cancel and monitor height and yaw navigation.
"""

import threading
from typing import TYPE_CHECKING, Optional
import logging

try:
    from flask import Flask, request, jsonify
    from flask_cors import CORS
    FLASK_AVAILABLE = True
except ImportError:
    FLASK_AVAILABLE = False

from ..navigation import NavigationRangeError, AlreadyNavigatingError

if TYPE_CHECKING:
    from ..navigation import Autopilot

logger = logging.getLogger(__name__)


def create_api_server(autopilot: 'Autopilot',
                      port: int = 8080,
                      host: str = '0.0.0.0') -> Optional['APIServer']:
    """
    Create and start REST API server

    Args:
        autopilot: Autopilot instance
        port: HTTP port
        host: Host address

    Returns:
        APIServer instance or None if Flask not available
    """
    if not FLASK_AVAILABLE:
        logger.warning("Flask not installed - REST API disabled")
        return None

    server = APIServer(autopilot, port, host)
    server.start()
    return server


class APIServer:
    """REST API Server"""

    def __init__(self, autopilot: 'Autopilot',
                 port: int = 8080, host: str = '0.0.0.0'):
        self.autopilot = autopilot
        self.port = port
        self.host = host

        self.app = Flask(__name__)
        CORS(self.app)

        self._thread: Optional[threading.Thread] = None
        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes"""

        def start(field: str, action):
            data = request.get_json(silent=True) or {}
            if field not in data:
                return jsonify({'error': f"Missing '{field}'"}), 400

            try:
                value = int(data[field])
            except (TypeError, ValueError):
                return jsonify({'error': f"'{field}' must be an integer"}), 400

            try:
                action(value)
            except NavigationRangeError as e:
                return jsonify({'error': str(e)}), 400
            except AlreadyNavigatingError as e:
                return jsonify({'error': str(e)}), 409

            return jsonify({'success': True, field: value}), 202

        # ==================== Status ====================

        @self.app.route('/api/status', methods=['GET'])
        def get_status():
            """Get telemetry, sticks and navigation status"""
            return jsonify(self.autopilot.get_status())

        # ==================== Height ====================

        @self.app.route('/api/nav/height', methods=['POST'])
        def start_height():
            """
            Start height navigation

            Request body: {"target_dm": 15}
            """
            return start('target_dm', self.autopilot.start_height_nav)

        @self.app.route('/api/nav/height', methods=['DELETE'])
        def cancel_height():
            """Cancel height navigation"""
            self.autopilot.cancel_height_nav()
            return jsonify({'success': True})

        # ==================== Yaw ====================

        @self.app.route('/api/nav/yaw', methods=['POST'])
        def start_yaw():
            """
            Start yaw navigation to an absolute heading

            Request body: {"target_deg": -90}
            """
            return start('target_deg', self.autopilot.start_yaw_nav)

        @self.app.route('/api/nav/turn', methods=['POST'])
        def turn():
            """
            Turn by a relative amount

            Request body: {"delta_deg": 45}
            """
            return start('delta_deg', self.autopilot.turn_by_deg)

        @self.app.route('/api/nav/yaw', methods=['DELETE'])
        def cancel_yaw():
            """Cancel yaw navigation"""
            self.autopilot.cancel_yaw_nav()
            return jsonify({'success': True})

    def start(self):
        """Start server in background thread"""
        self._thread = threading.Thread(
            target=lambda: self.app.run(host=self.host, port=self.port, threaded=True, use_reloader=False),
            name="rest-api",
            daemon=True
        )
        self._thread.start()
        logger.info(f"REST API started on {self.host}:{self.port}")

    def stop(self):
        """Stop server (daemon thread exits with the process)"""
        logger.info("REST API stopping")
