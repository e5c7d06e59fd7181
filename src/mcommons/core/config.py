"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar los adaptadores.
- Permite que el transporte HTTP lea base URL/timeout de forma consistente.

Las credenciales NO viven aquí: siempre las pasa el llamador al construir el cliente.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://secure.mcommons.com/api"
DEFAULT_TIMEOUT_SECONDS = 10.0


class ClientSettings(BaseSettings):
    """Configuración del transporte hacia la API de Mobile Commons.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el cliente con lógica.
    - Un único contrato de configuración para transporte y tests.
    """

    model_config = SettingsConfigDict(
        env_prefix="MCOMMONS_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Base URL de la API REST (sin barra final).",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="mcommons-python/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
