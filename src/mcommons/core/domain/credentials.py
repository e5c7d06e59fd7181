"""Credenciales de la API.

Por qué un tipo suma:
- La API acepta Basic *o* Bearer, nunca ambos a la vez.
- Dos modelos inmutables evitan el "objeto con campos opcionales" y obligan a
  que el transporte maneje cada variante de forma explícita.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class BasicAuth(BaseModel):
    """Usuario/contraseña para HTTP Basic."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["basic"] = "basic"
    username: str = Field(..., min_length=1, description="Usuario de Mobile Commons.")
    password: str = Field(..., min_length=1, repr=False, description="Contraseña.")


class BearerToken(BaseModel):
    """API key enviada como `Authorization: Bearer <token>`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bearer"] = "bearer"
    token: str = Field(..., min_length=1, repr=False, description="API key.")


Credentials = Annotated[Union[BasicAuth, BearerToken], Field(discriminator="kind")]
