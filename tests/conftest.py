"""Shared pytest fixtures."""

import pytest
from helpers import make_config

from palapizza.core.core import Core
from palapizza.core.modules.order.models import Order, OrderStatus


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def core(config):
    return Core(config)


@pytest.fixture
def sample_order():
    """A delivery order with every optional field filled."""
    return Order(
        id="42",
        timestamp="2024-05-01T18:00:00.000Z",
        name="Mario",
        phone="327 123 4567",
        type="CONSEGNA",
        date="2024-05-02",
        time="20:30",
        allergens="glutine",
        order="2 Margherita",
        address="Via Roma 1",
        status=OrderStatus.NEW,
        channel="APP",
        notes="",
    )
