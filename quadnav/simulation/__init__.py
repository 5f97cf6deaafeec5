"""
Vehicle simulation for running the autopilot without hardware
"""

from .sim_vehicle import SimulatedVehicle, SimulatedState

__all__ = ['SimulatedVehicle', 'SimulatedState']
