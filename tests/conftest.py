import os
import random

import pytest

os.environ.setdefault("STORE_SIM_DELAY", "0")

from schemas import CartItem, ChatContext, User
from services.catalog_loader import load_catalog
from agent.agent import StoreAgent


@pytest.fixture(scope="session")
def catalog():
    return load_catalog()


@pytest.fixture
def store_agent(catalog):
    return StoreAgent(catalog, rng=random.Random(42), delay=0)


@pytest.fixture
def john():
    return User(id=1, email="john@example.com", firstName="John", lastName="Doe",
                preferences=["electronics", "books"])


@pytest.fixture
def full_cart_context(catalog, john):
    items = [CartItem(product=catalog.get(1), quantity=1), CartItem(product=catalog.get(3), quantity=2)]
    return ChatContext(user=john, cartItems=items)


def ids(products):
    return [p.id for p in products]
