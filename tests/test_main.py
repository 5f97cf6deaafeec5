"""
Tests for the command line entry point
"""

import unittest

from quadnav.flight.sticks import ControlOutput
from quadnav.flight.telemetry import TelemetrySnapshot
from quadnav.main import parse_args, run_manoeuvres
from quadnav.navigation import Autopilot, NavigationRangeError

from fakes import RecordingLink


class TestParseArgs(unittest.TestCase):
    """Test argument parsing"""

    def test_defaults(self):
        args = parse_args([])

        self.assertFalse(args.simulation)
        self.assertFalse(args.serve)
        self.assertIsNone(args.height)
        self.assertIsNone(args.timeout)

    def test_manoeuvres(self):
        args = parse_args(['-s', '--height', '15', '--turn', '-90', '--timeout', '20'])

        self.assertTrue(args.simulation)
        self.assertEqual(args.height, 15)
        self.assertEqual(args.turn, -90)
        self.assertEqual(args.timeout, 20.0)

    def test_yaw_and_turn_exclusive(self):
        with self.assertRaises(SystemExit):
            parse_args(['--yaw', '10', '--turn', '10'])


class TestRunManoeuvres(unittest.TestCase):
    """Test waiting for manoeuvres"""

    def setUp(self):
        self.telemetry = TelemetrySnapshot()
        self.telemetry.update(height_dm=15, heading_deg=90)
        self.sticks = ControlOutput()
        self.autopilot = Autopilot(self.telemetry, self.sticks,
                                   RecordingLink(self.sticks), period_s=0.001)

    def tearDown(self):
        self.autopilot.cancel_all()
        self.autopilot.join(timeout=1.0)

    def test_all_reached(self):
        args = parse_args(['--height', '15', '--yaw', '90', '--timeout', '5'])

        self.assertTrue(run_manoeuvres(self.autopilot, args))

    def test_timeout_cancels(self):
        args = parse_args(['--height', '20', '--timeout', '0.05'])

        self.assertFalse(run_manoeuvres(self.autopilot, args))
        self.assertFalse(self.autopilot.is_navigating)

    def test_nothing_requested(self):
        self.assertTrue(run_manoeuvres(self.autopilot, parse_args([])))

    def test_rejected_manoeuvre_raises(self):
        args = parse_args(['--yaw', '200'])

        with self.assertRaises(NavigationRangeError):
            run_manoeuvres(self.autopilot, args)


if __name__ == '__main__':
    unittest.main()
