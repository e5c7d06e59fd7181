"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da tipado y coerción ligera ("12" -> 12, "true" -> True) sobre el árbol
  que produce el parser XML, sin acoplar el dominio a HTTP.
- `extra="allow"` conserva cualquier campo que la API añada en el futuro.

Nota:
- Las listas de campos son contratos externos de la API; todo es opcional
  porque el servidor omite elementos vacíos.
"""

from __future__ import annotations

from typing import Any, get_args

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class XmlModel(BaseModel):
    """Base de todo lo que sale del parser XML.

    El parser convierte atributos "true"/"false" a `bool`; si el campo es texto
    (p.ej. `status="true"`) se devuelve a su forma de cadena.
    """

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _bools_back_to_text(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        out = dict(data)
        for name, value in data.items():
            field = cls.model_fields.get(name)
            if field is None or not isinstance(value, bool):
                continue
            args = get_args(field.annotation) or (field.annotation,)
            if str in args and bool not in args:
                out[name] = "true" if value else "false"
        return out


class Record(XmlModel):
    """Base común: registro plano sin identidad más allá de sus campos."""

    id: str | None = Field(default=None, description="Identificador asignado por la API.")


class Campaign(Record):
    name: str | None = None
    description: str | None = None
    active: bool | None = None


class Group(Record):
    name: str | None = None
    size: int | None = None
    hint: str | None = None
    type: str | None = Field(default=None, description="p.ej. 'UploadedGroup'.")
    status: str | None = None


class MemberSource(XmlModel):
    type: str | None = None
    name: str | None = None
    id: str | None = None


class Address(XmlModel):
    street1: str | None = None
    street2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


class SavedLocation(XmlModel):
    latitude: float | None = None
    longitude: float | None = None
    precision: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


class SavedDistricts(XmlModel):
    congressional_district: str | None = None
    state_upper_district: str | None = None
    state_lower_district: str | None = None
    split_district: str | None = None


class Profile(Record):
    """Perfil de un suscriptor (número de teléfono + datos de contacto)."""

    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    email: str | None = None
    status: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    opted_out_at: str | None = None
    opted_out_source: str | None = None
    source: MemberSource | None = None
    address: Address | None = None
    last_saved_location: SavedLocation | None = None
    last_saved_districts: SavedDistricts | None = None
    custom_columns: dict[str, Any] | None = None


class GroupMember(Profile):
    """Perfil tal y como lo devuelve `/group_members` (incluye clicks)."""

    clicks: Any = None


class Subscriber(Record):
    """Suscripción de un perfil a una campaña."""

    profile_id: str | None = None
    phone_number: str | None = None
    activated_at: str | None = None
    opted_out_at: str | None = None


class BroadcastCampaign(XmlModel):
    name: str | None = None
    id: str | None = None
    active: bool | None = None


class Broadcast(Record):
    name: str | None = None
    body: str | None = None
    campaign: BroadcastCampaign | None = None
    delivery_time: str | None = None
    include_subscribers: bool | None = None
    throttled: bool | None = None
    localtime: bool | None = None
    automated: bool | None = None
    estimated_recipients_count: int | None = None
    replies_count: int | None = None
    opt_outs_count: int | None = None
    included_groups: Any = None
    excluded_groups: Any = None
    tags: Any = None
    status: str | None = None


class TinyUrl(Record):
    created_at: str | None = None
    name: str | None = None
    mode: str | None = None
    url: str | None = None
    host: str | None = None
    description: str | None = None
    key: str | None = None


class Click(Record):
    created_at: str | None = None
    url: str | None = None
    clicked_url: str | None = None
    remote_addr: str | None = None
    http_referer: str | None = None
    user_agent: str | None = None
    profile_id: int | None = None
