from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(StrEnum):
    """Order workflow states. Values are what the spreadsheet stores."""

    NEW = "NUOVO"
    CONFIRMED = "CONFERMATO"
    DELIVERED = "CONSEGNATO"
    CANCELLED = "ANNULLATO"


class OrderType(StrEnum):
    TABLE = "TAVOLO"
    PICKUP = "ASPORTO"
    DELIVERY = "CONSEGNA"


class OrderSubmission(BaseModel):
    """Order request as posted by the public form or the bot.

    Field names match the form and the spreadsheet columns, all values are loose strings
    and get validated by validate_submission.
    """

    nome: str | None = None
    telefono: str | None = None
    tipo: str | None = None
    data: str | None = Field(None, description="Date, YYYY-MM-DD")
    ora: str | None = Field(None, description="Time, HH:mm")
    allergeni: str | None = None
    ordine: str | None = None
    indirizzo: str | None = None
    note: str | None = None
    canale: str | None = Field(None, description="APP, BOT, MANUALE...")
    honeypot: str | None = None

    # Legacy box counters from the old skewer form
    box50: float | int | str | None = None
    box100: float | int | str | None = None
    box200: float | int | str | None = None
    totPezzi: float | int | str | None = None  # noqa: N815

    model_config = ConfigDict(extra="ignore")


class Order(BaseModel):
    """Order row as read back from the spreadsheet."""

    id: str
    timestamp: str = ""
    name: str = ""
    phone: str = ""
    type: str = OrderType.TABLE.value
    date: str = Field("", description="YYYY-MM-DD when the sheet value could be parsed")
    time: str = Field("", description="HH:mm when the sheet value could be parsed")
    allergens: str = ""
    order: str = ""
    address: str = ""
    status: OrderStatus = OrderStatus.NEW
    channel: str = ""
    notes: str = ""

    @property
    def sort_key(self) -> tuple[str, str]:
        return (f"{self.date} {self.time}".strip(), self.timestamp)
