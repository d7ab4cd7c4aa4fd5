# Fichero: assistant_relay/__init__.py - código compartido por las funciones
from .client import AssistantClient
from .config import Settings, load_settings
from .errors import (
    ConfigurationError,
    InvalidRequestError,
    RelayError,
    RunFailureError,
    RunTimeoutError,
    UnexpectedShapeError,
    UpstreamError,
)
from .relay import RelayResult, relay_message

__all__ = [
    "AssistantClient",
    "ConfigurationError",
    "InvalidRequestError",
    "RelayError",
    "RelayResult",
    "RunFailureError",
    "RunTimeoutError",
    "Settings",
    "UnexpectedShapeError",
    "UpstreamError",
    "load_settings",
    "relay_message",
]
