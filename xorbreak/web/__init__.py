"""JSON web API for xorbreak"""

from .server import WebAPIServer, create_app

__all__ = ['WebAPIServer', 'create_app']
