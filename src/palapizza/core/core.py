from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

import httpx

from palapizza.config import Config

if TYPE_CHECKING:
    from palapizza.core.modules.access.service import AccessService
    from palapizza.core.modules.chat.service import ChatService
    from palapizza.core.modules.order.service import OrderService
    from palapizza.core.modules.session.service import SessionService
    from palapizza.core.modules.store.service import StoreService


class Service:
    """Base class for services sharing the outbound HTTP client."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    session: SessionService
    access: AccessService
    store: StoreService
    order: OrderService
    chat: ChatService

    def __init__(self, http: httpx.AsyncClient) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("session", "palapizza.core.modules.session.service", "SessionService"),
            ("access", "palapizza.core.modules.access.service", "AccessService"),
            ("store", "palapizza.core.modules.store.service", "StoreService"),
            ("order", "palapizza.core.modules.order.service", "OrderService"),
            ("chat", "palapizza.core.modules.chat.service", "ChatService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(http)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, the shared HTTP client, and all service instances."""

    config: Config
    http: httpx.AsyncClient
    services: Services

    def __init__(self, config: Config, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize core with config and an HTTP client, then auto-register services.

        Args:
            config: Application settings
            http_client: Optional client for dependency injection (testing). Owned by the caller if given.
        """
        self.config = config
        self.http = http_client or httpx.AsyncClient(timeout=config.store_timeout, follow_redirects=True)
        self._owns_http = http_client is None
        self.services = Services(self.http)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the HTTP client if we own it."""
        await self.services.stop_all()
        if self._owns_http:
            await self.http.aclose()
