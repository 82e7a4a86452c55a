"""
Web Module
==========

Flask-based bridge between the game engines and a browser front end.

Components:
    server.py    - Flask + SocketIO server (REST + game events)
"""

from .server import GameServer

__all__ = ['GameServer']
