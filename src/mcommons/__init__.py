"""Cliente asíncrono para la API XML de Mobile Commons.

Los logs de la librería están desactivados por defecto; una aplicación los
activa con `loguru.logger.enable("mcommons")`.
"""

from __future__ import annotations

from loguru import logger

from mcommons.adapters.client import MobileCommonsClient
from mcommons.core.config import ClientSettings
from mcommons.core.domain.credentials import BasicAuth, BearerToken, Credentials
from mcommons.core.domain.models import (
    Broadcast,
    Campaign,
    Click,
    Group,
    GroupMember,
    Profile,
    Subscriber,
    TinyUrl,
)
from mcommons.core.errors import (
    ApiError,
    MobileCommonsError,
    ParseError,
    TransportError,
    ValidationError,
)
from mcommons.core.pagination import paginate

logger.disable("mcommons")

__all__ = [
    "ApiError",
    "BasicAuth",
    "BearerToken",
    "Broadcast",
    "Campaign",
    "Click",
    "ClientSettings",
    "Credentials",
    "Group",
    "GroupMember",
    "MobileCommonsClient",
    "MobileCommonsError",
    "ParseError",
    "Profile",
    "Subscriber",
    "TinyUrl",
    "TransportError",
    "ValidationError",
    "paginate",
]

__version__ = "0.1.0"
