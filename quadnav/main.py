#!/usr/bin/env python3
"""
quadnav - Main Entry Point

Flies height and yaw manoeuvres on a simulated vehicle or an MSP flight
controller, or serves the REST API.
"""

import argparse
import signal
import sys
import time
import logging

from .config import Config, set_config
from .flight.flight_controller import FlightController
from .navigation import NavigationError, NavigationOutcome
from .utils.logger import setup_logging, level_from_name

# Global flight controller instance for signal handling
_flight_controller: FlightController = None


def signal_handler(signum, frame):
    """Handle shutdown signals gracefully"""
    logging.info(f"Received signal {signum}, shutting down...")

    if _flight_controller:
        _flight_controller.shutdown()

    sys.exit(0)


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="quadnav - height and yaw autopilot"
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Path to configuration file (YAML)"
    )

    parser.add_argument(
        "-s", "--simulation",
        action="store_true",
        help="Fly a simulated vehicle"
    )

    parser.add_argument(
        "--port",
        type=str,
        default=None,
        help="Serial port of the flight controller (e.g., /dev/ttyACM0)"
    )

    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Fly to this height in decimetres"
    )

    parser.add_argument(
        "--yaw",
        type=int,
        default=None,
        help="Turn to this heading in degrees (-180..180)"
    )

    parser.add_argument(
        "--turn",
        type=int,
        default=None,
        help="Turn by this many degrees (-180..180, negative = anticlockwise)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Cancel manoeuvres still running after this many seconds"
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the REST API until interrupted"
    )

    parser.add_argument(
        "--rest-port",
        type=int,
        default=None,
        help="REST API port (default from config)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log file path"
    )

    args = parser.parse_args(argv)

    if args.yaw is not None and args.turn is not None:
        parser.error("--yaw and --turn are mutually exclusive")

    return args


def run_manoeuvres(autopilot, args) -> bool:
    """
    Start the requested manoeuvres and wait for them

    Returns:
        True if every manoeuvre reached its target
    """
    logger = logging.getLogger(__name__)
    signals = []

    if args.height is not None:
        signals.append(autopilot.start_height_nav(args.height))
    if args.yaw is not None:
        signals.append(autopilot.start_yaw_nav(args.yaw))
    if args.turn is not None:
        signals.append(autopilot.turn_by_deg(args.turn))

    deadline = time.time() + args.timeout if args.timeout else None
    for done in signals:
        remaining = None if deadline is None else max(0.0, deadline - time.time())
        if done.wait(remaining) is None:
            logger.warning(f"{done.axis} navigation timed out, cancelling")
            autopilot.cancel_all()
            break

    # Cancelled tasks report on their next tick
    results = [done.wait(1.0) for done in signals]
    for done in signals:
        logger.info(f"{done.axis} navigation finished: {done.outcome.name if done.outcome else 'UNKNOWN'}")

    status = autopilot.get_status()['telemetry']
    logger.info(f"Height: {status['height_dm']} dm, heading: {status['heading_deg']} deg")

    return all(result is NavigationOutcome.REACHED for result in results)


def main(argv=None):
    """Main entry point"""
    global _flight_controller

    args = parse_args(argv)

    # Load configuration
    config = Config.load(args.config)

    if args.simulation:
        config.simulation.enabled = True
    if args.port:
        config.serial.port = args.port
    if args.rest_port:
        config.interface.rest_port = args.rest_port
    if args.serve:
        config.interface.rest_enabled = True

    set_config(config)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else level_from_name(config.interface.log_level)
    setup_logging(level=log_level, log_file=args.log_file or config.interface.log_file or None)

    logger = logging.getLogger(__name__)
    logger.info("quadnav starting...")

    # Setup signal handlers
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    _flight_controller = FlightController(simulation=config.simulation.enabled)

    if not _flight_controller.initialize():
        logger.error("Failed to initialize flight controller")
        sys.exit(1)

    _flight_controller.start()
    exit_code = 0

    try:
        if config.interface.rest_enabled:
            from .interfaces.rest_api import create_api_server
            api_server = create_api_server(
                _flight_controller.autopilot,
                port=config.interface.rest_port,
                host=config.interface.rest_host
            )
            if api_server is None:
                exit_code = 1
            else:
                logger.info("Serving. Press Ctrl+C to stop.")
                while True:
                    time.sleep(1)
                    logger.debug(f"Status: {_flight_controller.get_telemetry()}")
        else:
            try:
                if not run_manoeuvres(_flight_controller.autopilot, args):
                    exit_code = 1
            except NavigationError as e:
                logger.error(f"Manoeuvre rejected: {e}")
                exit_code = 1

    except KeyboardInterrupt:
        pass
    finally:
        _flight_controller.shutdown()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
