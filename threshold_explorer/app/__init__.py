"""Dash web app for the threshold explorer."""

from .app import ServerState, create_app

__all__ = ["create_app", "ServerState"]
