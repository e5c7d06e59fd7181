"""Adaptadores de I/O: httpx + XML.

Por qué un paquete:
- Agrupa todo lo que toca la red o el formato de cable.
- El núcleo (`mcommons.core`) no importa nada de aquí.
"""

from mcommons.adapters.client import MobileCommonsClient
from mcommons.adapters.transport import Transport

__all__ = [
	"MobileCommonsClient",
	"Transport",
]
