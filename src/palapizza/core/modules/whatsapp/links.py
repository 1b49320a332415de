"""WhatsApp handoff for order status notifications.

Staff confirm orders by opening a prefilled WhatsApp chat with the customer. Phone
numbers come from a free-text form field, so normalization is best effort.
"""

import re
from urllib.parse import quote, urlencode

from palapizza.core.modules.order.models import Order, OrderStatus

MOBILE_UA_RE = re.compile(r"Android|iPhone|iPad|iPod", re.IGNORECASE)
BARE_ITALIAN_NUMBER_RE = re.compile(r"^\d{10}$")

STATUS_HEADLINES = {
    OrderStatus.CONFIRMED: ("✅ CONFERMATO!", "Perfetto, il tuo ordine è confermato. 🍕"),
    OrderStatus.DELIVERED: ("🚚 CONSEGNATO!", "Grazie! Buon appetito 😄"),
    OrderStatus.CANCELLED: ("❌ ANNULLATO", "Purtroppo non riusciamo a gestire l’ordine ora."),
}


def normalize_phone(raw: str | None) -> str:
    return re.sub(r"[^\d+]", "", raw or "")


def phone_for_whatsapp(raw: str | None) -> str:
    """Return the number in the international digits-only form wa.me expects.

    A bare 10-digit number is assumed Italian and gets the 39 prefix.
    """
    phone = normalize_phone(raw).replace("+", "", 1).strip()
    if phone.startswith("00"):
        phone = phone[2:]
    if phone and not phone.startswith("39") and BARE_ITALIAN_NUMBER_RE.match(phone):
        phone = f"39{phone}"
    return phone


def is_mobile_user_agent(user_agent: str | None) -> bool:
    return bool(user_agent and MOBILE_UA_RE.search(user_agent))


def format_date_it(iso: str) -> str:
    if not iso:
        return "—"
    parts = iso.split("-")
    if len(parts) != 3 or not all(parts):
        return iso
    year, month, day = parts
    return f"{day}/{month}/{year}"


def build_status_message(order: Order, status: OrderStatus) -> str:
    """Compose the message sent to the customer when staff move an order to ``status``."""
    if status not in STATUS_HEADLINES:
        raise ValueError(f"No customer message for status {status.name}")

    lines = [
        f"Ciao {order.name}! 👋",
        f"Ordine {format_date_it(order.date)} ore {order.time}",
        f"Tipo: {order.type}",
        f"Ordine: {order.order}",
    ]
    if order.allergens:
        lines.append(f"Allergeni: {order.allergens}")
    if order.address:
        lines.append(f"Indirizzo: {order.address}")

    headline, closing = STATUS_HEADLINES[status]
    body = "\n".join(lines)
    return f"{headline}\n{body}\n\n{closing}"


def build_whatsapp_url(phone_raw: str | None, text: str, mobile: bool = False) -> str:
    """Deep link opening a chat prefilled with ``text``; empty when there is no usable phone.

    Mobile devices get wa.me (opens the app), desktops get WhatsApp Web.
    """
    phone = phone_for_whatsapp(phone_raw)
    if not phone:
        return ""
    if mobile:
        return f"https://wa.me/{phone}?text={quote(text, safe='')}"
    return f"https://web.whatsapp.com/send?{urlencode({'phone': phone, 'text': text})}"
