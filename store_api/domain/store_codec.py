"""
Bidirectional mapping between the Store aggregate and a flat table record.

Every scalar leaf of the nested sub-entities gets its own prefixed attribute
(CountryCode, ManagerEmail, VisitGeoPosLon, ...). The opening hours are the only
variable-length collection and are kept as a JSON text blob in `OpeningHours`.

Decoding is tolerant: a missing or mistyped attribute yields the zero value of
the field and a broken opening-hours blob yields an empty list.
"""
from __future__ import annotations

import json
import math
from typing import Any, Mapping

from store_api.domain.stores import (
    Country,
    Manager,
    OpeningHour,
    Store,
    VisitAddress,
    VisitGeoPos,
)

PARTITION_KEY = "PartitionKey"
ROW_KEY = "RowKey"
OPENING_HOURS = "OpeningHours"


# -------------------------- opening hours blob --------------------------
def serialize_opening_hours(hours: list[OpeningHour] | None) -> str:
    items = [
        {"Day": hour.day or "", "OpenFrom": hour.open_from or "", "OpenTo": hour.open_to or ""}
        for hour in (hours or [])
    ]
    return json.dumps(items, ensure_ascii=False, separators=(",", ":"))


def parse_opening_hours(blob: Any) -> list[OpeningHour]:
    if not isinstance(blob, str) or not blob.strip():
        return []
    try:
        items = json.loads(blob)
    except (ValueError, RecursionError):
        return []
    if not isinstance(items, list):
        return []
    hours = []
    for item in items:
        if not isinstance(item, dict):
            continue
        hours.append(
            OpeningHour(
                day=_string(item, "Day"),
                open_from=_string(item, "OpenFrom"),
                open_to=_string(item, "OpenTo"),
            )
        )
    return hours


# -------------------------- attribute readers --------------------------
def _string(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    return value if isinstance(value, str) else ""


def _float(record: Mapping[str, Any], key: str) -> float:
    value = record.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    try:
        value = float(value)
    except OverflowError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _coordinate(value: Any, name: str) -> float:
    try:
        number = float(value or 0.0)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise ValueError(f"{name} must be a finite number")
    return number


def _bool(record: Mapping[str, Any], key: str) -> bool:
    value = record.get(key)
    return value if isinstance(value, bool) else False


# -------------------------- codec --------------------------
def encode_store(store: Store) -> dict:
    """Flatten a Store into a record. Absent sub-entities encode as zero values.

    Raises ValueError for a non-finite coordinate.
    """
    country = store.country or Country()
    manager = store.manager or Manager()
    geo = store.visit_geo_pos or VisitGeoPos()
    address = store.visit_address or VisitAddress()
    name = store.name or ""
    return {
        PARTITION_KEY: store.store_no or "",
        ROW_KEY: name,
        "Name": name,
        "Active": bool(store.active),
        "CountryCode": country.code or "",
        "CountryDescription": country.description or "",
        "Phone": store.phone or "",
        "Email": store.email or "",
        "ManagerName": manager.name or "",
        "ManagerEmail": manager.email or "",
        "VisitGeoPosLon": _coordinate(geo.lon, "VisitGeoPos.Lon"),
        "VisitGeoPosLat": _coordinate(geo.lat, "VisitGeoPos.Lat"),
        "VisitAddressStoreName": address.store_name or "",
        "VisitAddress": address.address or "",
        "City": address.city or "",
        "Zipcode": address.zipcode or "",
        OPENING_HOURS: serialize_opening_hours(store.opening_hours),
    }


def decode_store(record: Mapping[str, Any]) -> Store:
    """Rebuild a Store from a record. Never raises on missing or malformed attributes."""
    return Store(
        store_no=_string(record, PARTITION_KEY),
        name=_string(record, "Name"),
        active=_bool(record, "Active"),
        phone=_string(record, "Phone"),
        email=_string(record, "Email"),
        country=Country(
            code=_string(record, "CountryCode"),
            description=_string(record, "CountryDescription"),
        ),
        manager=Manager(
            name=_string(record, "ManagerName"),
            email=_string(record, "ManagerEmail"),
        ),
        visit_geo_pos=VisitGeoPos(
            lon=_float(record, "VisitGeoPosLon"),
            lat=_float(record, "VisitGeoPosLat"),
        ),
        visit_address=VisitAddress(
            store_name=_string(record, "VisitAddressStoreName"),
            address=_string(record, "VisitAddress"),
            city=_string(record, "City"),
            zipcode=_string(record, "Zipcode"),
        ),
        opening_hours=parse_opening_hours(record.get(OPENING_HOURS)),
    )
