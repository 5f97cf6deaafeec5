"""
quadnav - height and yaw autopilot for quadcopters
"""

__version__ = "0.1.0"
