"""
Tests for the REST API
"""

import unittest

from quadnav.flight.sticks import ControlOutput
from quadnav.flight.telemetry import TelemetrySnapshot
from quadnav.interfaces.rest_api import FLASK_AVAILABLE
from quadnav.navigation import Autopilot

from fakes import RecordingLink


@unittest.skipUnless(FLASK_AVAILABLE, "Flask not installed")
class TestRestAPI(unittest.TestCase):
    """Test REST endpoints"""

    def setUp(self):
        from quadnav.interfaces.rest_api import APIServer

        self.telemetry = TelemetrySnapshot()
        self.telemetry.update(height_dm=0, heading_deg=170)
        self.sticks = ControlOutput()
        self.autopilot = Autopilot(self.telemetry, self.sticks,
                                   RecordingLink(self.sticks), period_s=0.001)
        self.server = APIServer(self.autopilot)
        self.client = self.server.app.test_client()

    def tearDown(self):
        self.autopilot.cancel_all()
        self.autopilot.join(timeout=1.0)

    def test_status(self):
        response = self.client.get('/api/status')

        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data['telemetry']['heading_deg'], 170)
        self.assertIn('height', data['navigation'])
        self.assertIn('yaw', data['navigation'])

    def test_start_height(self):
        response = self.client.post('/api/nav/height', json={'target_dm': 15})

        self.assertEqual(response.status_code, 202)
        self.assertEqual(response.get_json()['target_dm'], 15)
        self.assertTrue(self.autopilot.height.is_active)

    def test_height_conflict(self):
        self.client.post('/api/nav/height', json={'target_dm': 15})

        response = self.client.post('/api/nav/height', json={'target_dm': 20})

        self.assertEqual(response.status_code, 409)
        self.assertEqual(self.autopilot.height.target, 15)

    def test_height_out_of_range(self):
        response = self.client.post('/api/nav/height', json={'target_dm': 500})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(self.autopilot.height.is_active)

    def test_missing_field(self):
        response = self.client.post('/api/nav/yaw', json={})

        self.assertEqual(response.status_code, 400)
        self.assertIn('target_deg', response.get_json()['error'])

    def test_invalid_field(self):
        response = self.client.post('/api/nav/turn', json={'delta_deg': 'left'})

        self.assertEqual(response.status_code, 400)

    def test_turn(self):
        response = self.client.post('/api/nav/turn', json={'delta_deg': 30})

        self.assertEqual(response.status_code, 202)
        self.assertEqual(self.autopilot.yaw.target, -160)

    def test_cancel(self):
        self.client.post('/api/nav/yaw', json={'target_deg': -90})
        signal_thread = self.autopilot.yaw._thread

        response = self.client.delete('/api/nav/yaw')

        self.assertEqual(response.status_code, 200)
        signal_thread.join(timeout=1.0)
        self.assertFalse(self.autopilot.yaw.is_active)

    def test_cancel_idle(self):
        response = self.client.delete('/api/nav/height')

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()['success'])


if __name__ == '__main__':
    unittest.main()
