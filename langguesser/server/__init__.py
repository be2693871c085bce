"""
langguesser REST API Server
"""

from langguesser.server.api import app, start_server
from langguesser.server.models import ModelRegistry

__all__ = ["app", "start_server", "ModelRegistry"]
