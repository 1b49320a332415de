from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from palapizza.config import Config
from palapizza.core.core import Core
from palapizza.core.modules.chat.models import ChatMessage
from palapizza.core.modules.order.models import Order, OrderStatus, OrderSubmission
from palapizza.core.modules.session.models import SessionToken


class App:
    """Facade for all application operations, checks configuration and access before delegating to Core."""

    def __init__(self, config: Config, http_client: httpx.AsyncClient | None = None) -> None:
        self._core = Core(config, http_client)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Staff session ===
    def login(self, password: str) -> SessionToken:
        """Check the admin password and issue a session token."""
        return self._core.services.session.login(password)

    def is_authenticated(self, token: str | None) -> bool:
        """Whether the cookie token is a valid staff session. False when no secret is configured."""
        return self._core.services.session.is_valid(token)

    # === Orders ===
    async def submit_order(self, submission: OrderSubmission) -> Any | None:
        """Forward a public order request to the store (no authentication)."""
        return await self._core.services.order.submit_order(submission)

    async def list_orders(self, token: str | None, limit: Any = None) -> tuple[list[Order], int]:
        """List orders sorted by schedule (staff only)."""
        self._core.services.store.ensure_configured()
        self._core.services.access.ensure_staff(token)
        return await self._core.services.order.list_orders(limit)

    async def update_order_status(
        self, token: str | None, order_id: str, status: str, notify: bool = False, mobile: bool = False
    ) -> tuple[OrderStatus, Any, str | None]:
        """Change an order status (staff only).

        Returns the applied status, the store answer and, when ``notify`` is set,
        the WhatsApp link with the customer message.
        """
        self._core.services.store.ensure_configured()
        self._core.services.access.ensure_staff(token)
        return await self._core.services.order.update_status(order_id, status, notify=notify, mobile=mobile)

    # === Chat ===
    @property
    def chat_greeting(self) -> str:
        return self._core.services.chat.greeting

    async def chat(self, message: str, history: list[ChatMessage] | None = None) -> str:
        """Answer a customer question."""
        return await self._core.services.chat.reply(message, history)
