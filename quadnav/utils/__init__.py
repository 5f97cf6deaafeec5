"""
Utility modules
"""

from .angles import to_compass, normalize_heading, wrap_heading, heading_error
from .logger import setup_logging

__all__ = ['to_compass', 'normalize_heading', 'wrap_heading', 'heading_error', 'setup_logging']
