from __future__ import annotations

import pytest

from assistant_relay.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(assistant_id="asst_123")


@pytest.fixture
def sleeps() -> list:
    return []


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append
