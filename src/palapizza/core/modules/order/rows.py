"""Deserialization of spreadsheet rows into Order models.

The store hands rows back either as positional lists (sheet column order) or as
mappings keyed by header name, and header names drifted over time. COLUMNS lists
the column index and the header names tried, in order, for each field.
"""

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from palapizza.core.modules.order.models import Order, OrderStatus, OrderType
from palapizza.utils import clean

COLUMNS: dict[str, tuple[int, tuple[str, ...]]] = {
    "timestamp": (0, ("Timestamp", "timestamp")),
    "name": (1, ("Nome", "name", "nome")),
    "phone": (2, ("Telefono", "phone", "telefono")),
    "type": (3, ("Tipo", "type", "tipo")),
    "date": (4, ("Data", "date", "dataISO", "dataIso", "data")),
    "time": (5, ("Ora", "time", "ora")),
    "allergens": (6, ("Allergeni", "allergens", "allergeni")),
    "order": (7, ("Ordine", "order", "ordine")),
    "address": (8, ("Indirizzo", "address", "indirizzo")),
    "status": (9, ("Stato", "status", "stato")),
    "channel": (10, ("Bot o Manuale", "canale", "source")),
    "notes": (11, ("Note", "note")),
    "id": (12, ("ID", "id")),
}

STATUS_ALIASES: dict[str, OrderStatus] = {
    "NUOVA": OrderStatus.NEW,
    "CONFERMATA": OrderStatus.CONFIRMED,
    "ANNULLATA": OrderStatus.CANCELLED,
    "NEW": OrderStatus.NEW,
    "CONFIRMED": OrderStatus.CONFIRMED,
    "DELIVERED": OrderStatus.DELIVERED,
    "CANCELLED": OrderStatus.CANCELLED,
}

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
IT_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
HHMM_RE = re.compile(r"^\d{2}:\d{2}$")
TIME_IN_TEXT_RE = re.compile(r"(\d{1,2}):(\d{2})")

# Sheets serializes date and time cells as UTC instants of the restaurant's local time
SHEET_TIMEZONE = ZoneInfo("Europe/Rome")


def pick(row: Any, field: str) -> Any:
    """Return the raw cell for ``field`` from a list row or a mapping row."""
    index, keys = COLUMNS[field]
    if isinstance(row, list | tuple):
        return row[index] if index < len(row) else None
    if not isinstance(row, Mapping):
        return None

    for key in keys:
        if row.get(key) is not None:
            return row[key]
    lowered = {str(k).lower(): v for k, v in row.items()}
    for key in keys:
        value = lowered.get(key.lower())
        if value is not None:
            return value
    return None


def parse_status(value: Any) -> OrderStatus | None:
    """Map any known spelling of a status to OrderStatus, None when unknown. Empty means NEW."""
    raw = clean(value).upper()
    if not raw:
        return OrderStatus.NEW
    if raw in STATUS_ALIASES:
        return STATUS_ALIASES[raw]
    try:
        return OrderStatus(raw)
    except ValueError:
        return None


def _parse_datetime(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.astimezone(SHEET_TIMEZONE) if parsed.tzinfo else parsed


def normalize_date(value: Any) -> str:
    """Return YYYY-MM-DD for ISO dates, DD/MM/YYYY and ISO datetimes; anything else unchanged."""
    text = clean(value)
    if not text or ISO_DATE_RE.match(text):
        return text

    if m := IT_DATE_RE.match(text):
        return f"{m.group(3)}-{m.group(2)}-{m.group(1)}"

    parsed = _parse_datetime(text)
    return parsed.date().isoformat() if parsed else text


def normalize_time(value: Any) -> str:
    """Return HH:mm; Sheets serializes bare times as 1899-12-30T12:30:00 datetimes."""
    text = clean(value)
    if not text or HHMM_RE.match(text):
        return text

    parsed = _parse_datetime(text) if "-" in text else None
    if parsed:
        return parsed.strftime("%H:%M")

    if m := TIME_IN_TEXT_RE.search(text):
        return f"{int(m.group(1)):02d}:{m.group(2)}"

    return text


def parse_order_row(row: Any, index: int) -> Order:
    """Build an Order from one store row. ``index`` is used to synthesize a missing id."""
    timestamp = clean(pick(row, "timestamp"))
    order_id = clean(pick(row, "id")) or f"fallback-{timestamp}-{index}"

    return Order(
        id=order_id,
        timestamp=timestamp,
        name=clean(pick(row, "name")),
        phone=clean(pick(row, "phone")),
        type=clean(pick(row, "type")).upper() or OrderType.TABLE.value,
        date=normalize_date(pick(row, "date")),
        time=normalize_time(pick(row, "time")),
        allergens=clean(pick(row, "allergens")),
        order=clean(pick(row, "order")),
        address=clean(pick(row, "address")),
        status=parse_status(pick(row, "status")) or OrderStatus.NEW,
        channel=clean(pick(row, "channel")).upper(),
        notes=clean(pick(row, "notes")),
    )


def parse_order_rows(rows: list[Any]) -> list[Order]:
    """Deserialize and sort rows by scheduled date/time, then by submission timestamp."""
    orders = [parse_order_row(row, index) for index, row in enumerate(rows)]
    orders.sort(key=lambda order: order.sort_key)
    return orders
