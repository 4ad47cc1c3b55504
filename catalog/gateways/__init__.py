"""
Data gateways for the catalog client.

- BaseGateway: shared coroutine interface
- RemoteGateway: backend REST API over httpx
- LocalGateway: in-memory fallback over a WorkingSet
"""

from .base import BaseGateway, GatewayFailure
from .local_gateway import LocalGateway, WorkingSet, generate_id
from .remote_gateway import RemoteGateway

__all__ = [
    "BaseGateway",
    "GatewayFailure",
    "LocalGateway",
    "RemoteGateway",
    "WorkingSet",
    "generate_id",
]
