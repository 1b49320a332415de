import re
from typing import Any

from palapizza.core.modules.order.models import OrderStatus, OrderSubmission, OrderType
from palapizza.errors import ValidationError
from palapizza.utils import clean

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def is_spam(submission: OrderSubmission) -> bool:
    """Bots fill the hidden honeypot field, humans never see it."""
    return bool(clean(submission.honeypot))


def _to_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def build_order_from_boxes(submission: OrderSubmission) -> str:
    """Describe an order placed with the legacy box counters, empty when there are no pieces."""
    box50 = _to_int(submission.box50)
    box100 = _to_int(submission.box100)
    box200 = _to_int(submission.box200)
    total = _to_int(submission.totPezzi) or box50 * 50 + box100 * 100 + box200 * 200
    if total <= 0:
        return ""

    parts = [f"Box {size} x{count}" for size, count in ((50, box50), (100, box100), (200, box200)) if count]
    parts.append(f"Tot pezzi: {total}")
    return " • ".join(parts)


def validate_submission(submission: OrderSubmission) -> dict[str, str]:
    """Validate a submission and return the normalized row to append to the sheet.

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    row = {
        "nome": clean(submission.nome),
        "telefono": clean(submission.telefono),
        "tipo": clean(submission.tipo).upper(),
        "data": clean(submission.data),
        "ora": clean(submission.ora),
        "allergeni": clean(submission.allergeni),
        "ordine": clean(submission.ordine) or build_order_from_boxes(submission),
        "indirizzo": clean(submission.indirizzo),
        "stato": OrderStatus.NEW.value,
        "canale": (clean(submission.canale) or "APP").upper(),
        "note": clean(submission.note),
    }

    if not all(row[key] for key in ("nome", "telefono", "tipo", "data", "ora", "ordine")):
        raise ValidationError("Campi obbligatori mancanti (nome, telefono, tipo, data, ora, ordine).")
    if row["tipo"] not in {t.value for t in OrderType}:
        raise ValidationError("Tipo non valido. Usa: TAVOLO / ASPORTO / CONSEGNA.")
    if not DATE_RE.match(row["data"]):
        raise ValidationError("Formato data non valido (YYYY-MM-DD).")
    if not TIME_RE.match(row["ora"]):
        raise ValidationError("Formato ora non valido (HH:mm).")
    if row["tipo"] == OrderType.DELIVERY and not row["indirizzo"]:
        raise ValidationError("Per CONSEGNA serve l'indirizzo.")

    return row
