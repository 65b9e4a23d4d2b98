from .base import BackendClient, BackendConfigError, BackendError, ConnectionProbe
from .provider import BackendProvider

__all__ = [
    "BackendClient",
    "BackendConfigError",
    "BackendError",
    "BackendProvider",
    "ConnectionProbe",
]
