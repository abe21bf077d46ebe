"""Store aggregate and its wire (JSON payload) conversions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_pascal


class InvalidStoreError(ValueError):
    """Raised when an inbound payload does not have the shape of a store."""


@dataclass
class Country:
    code: str = ""
    description: str = ""


@dataclass
class Manager:
    name: str = ""
    email: str = ""


@dataclass
class VisitGeoPos:
    lon: float = 0.0
    lat: float = 0.0


@dataclass
class VisitAddress:
    store_name: str = ""
    address: str = ""
    city: str = ""
    zipcode: str = ""


@dataclass
class OpeningHour:
    day: str = ""
    open_from: str = ""
    open_to: str = ""


@dataclass
class Store:
    """Aggregate root. `store_no` is the unique, immutable identity."""

    store_no: str = ""
    name: str = ""
    active: bool = False
    phone: str = ""
    email: str = ""
    country: Country = field(default_factory=Country)
    manager: Manager = field(default_factory=Manager)
    visit_geo_pos: VisitGeoPos = field(default_factory=VisitGeoPos)
    visit_address: VisitAddress = field(default_factory=VisitAddress)
    opening_hours: list[OpeningHour] = field(default_factory=list)


# -------------------------- inbound --------------------------
class _Payload(BaseModel):
    """Inbound JSON object. Member names match case-insensitively, nulls take defaults."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _match_members(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        matched = {}
        for name in cls.model_fields:
            member = to_pascal(name)
            if member in data:
                value = data[member]
            else:
                wanted = member.lower()
                value = next(
                    (v for k, v in data.items() if isinstance(k, str) and k.lower() == wanted),
                    None,
                )
            if value is not None:
                matched[name] = value
        return matched


class CountryPayload(_Payload):
    code: str = ""
    description: str = ""


class ManagerPayload(_Payload):
    name: str = ""
    email: str = ""


class VisitGeoPosPayload(_Payload):
    lon: float = 0.0
    lat: float = 0.0

    @field_validator("lon", "lat", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be a number")
        return value


class VisitAddressPayload(_Payload):
    store_name: str = ""
    address: str = ""
    city: str = ""
    zipcode: str = ""


class OpeningHourPayload(_Payload):
    day: str = ""
    open_from: str = ""
    open_to: str = ""


class StorePayload(_Payload):
    store_no: str = ""
    name: str = ""
    active: bool = False
    phone: str = ""
    email: str = ""
    country: CountryPayload = Field(default_factory=CountryPayload)
    manager: ManagerPayload = Field(default_factory=ManagerPayload)
    visit_geo_pos: VisitGeoPosPayload = Field(default_factory=VisitGeoPosPayload)
    visit_address: VisitAddressPayload = Field(default_factory=VisitAddressPayload)
    opening_hours: list[OpeningHourPayload] = Field(default_factory=list)

    def to_store(self) -> Store:
        return Store(
            store_no=self.store_no,
            name=self.name,
            active=self.active,
            phone=self.phone,
            email=self.email,
            country=Country(**self.country.model_dump()),
            manager=Manager(**self.manager.model_dump()),
            visit_geo_pos=VisitGeoPos(**self.visit_geo_pos.model_dump()),
            visit_address=VisitAddress(**self.visit_address.model_dump()),
            opening_hours=[OpeningHour(**hour.model_dump()) for hour in self.opening_hours],
        )


def store_from_payload(payload: Any) -> Store:
    """Build a Store from a decoded JSON object. Missing or null members take zero values."""
    if payload is None:
        raise InvalidStoreError("store payload is empty")
    try:
        return StorePayload.model_validate(payload).to_store()
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(part) for part in first["loc"]) or "store"
        raise InvalidStoreError(f"{where}: {first['msg']}") from exc


# -------------------------- outbound --------------------------
def store_to_payload(store: Store) -> dict:
    """Outbound JSON shape (camelCase member names)."""
    return {
        "storeNo": store.store_no,
        "name": store.name,
        "active": store.active,
        "country": {"code": store.country.code, "description": store.country.description},
        "phone": store.phone,
        "email": store.email,
        "manager": {"name": store.manager.name, "email": store.manager.email},
        "visitGeoPos": {"lon": store.visit_geo_pos.lon, "lat": store.visit_geo_pos.lat},
        "visitAddress": {
            "storeName": store.visit_address.store_name,
            "address": store.visit_address.address,
            "city": store.visit_address.city,
            "zipcode": store.visit_address.zipcode,
        },
        "openingHours": [
            {"day": hour.day, "openFrom": hour.open_from, "openTo": hour.open_to}
            for hour in store.opening_hours
        ],
    }
