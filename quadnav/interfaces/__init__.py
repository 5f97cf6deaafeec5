"""
External interfaces for quadnav
"""

from .rest_api import create_api_server, APIServer, FLASK_AVAILABLE

__all__ = ['create_api_server', 'APIServer', 'FLASK_AVAILABLE']
