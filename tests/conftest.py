"""Pytest configuration and fixtures."""

import random
import tempfile
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from liftpal.db import Gateway, UserRepository, init_db, seed_catalog
from liftpal.services import PartnerManager, ProgressAggregator, WorkoutGenerator

# A Wednesday; with Sunday as first weekday the week starts 2025-03-09
FIXED_NOW = datetime(2025, 3, 12, 18, 30)


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
async def db_path(temp_db_path):
    """Initialized database with the built-in catalog."""
    await init_db(temp_db_path)
    await seed_catalog(temp_db_path)
    return temp_db_path


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
async def users(db_path):
    """Three users: alice, bob and carol."""
    repo = UserRepository(Gateway(db_path))
    return SimpleNamespace(
        alice=await repo.create("Alice Park", "alice", "alice@example.com"),
        bob=await repo.create("Bob Stone", "bob", "bob@example.com"),
        carol=await repo.create("Carol Diaz", "carol", "carol@example.com"),
    )


@pytest.fixture
def services(db_path, clock):
    """Factory for the services acting as a given user."""

    def make(user_id: int | None, seed: int = 42):
        gateway = Gateway(db_path, user_id=user_id)
        return SimpleNamespace(
            gateway=gateway,
            generator=WorkoutGenerator(gateway, rng=random.Random(seed), clock=clock),
            progress=ProgressAggregator(gateway, clock=clock),
            partners=PartnerManager(gateway),
        )

    return make
