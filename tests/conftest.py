import os
from datetime import datetime, timedelta, timezone
from typing import Iterator, List

import pytest

from shadowstamp import Schema, last_modified_fields, model
from shadowstamp.settings import get_settings

SUFFIX = "_lastModified"


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep SHADOW_* variables from the outer environment out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("SHADOW_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeClock:
    """Stand-in for ``get_current_timestamp`` handing out increasing times."""

    def __init__(self, start: datetime):
        self.now = start
        self.calls: List[datetime] = []

    def __call__(self) -> datetime:
        self.calls.append(self.now)
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock(datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc))
    monkeypatch.setattr("shadowstamp.augment.stamping.get_current_timestamp", fake)
    return fake


def car_fields():
    return {
        "make": str,
        "model": str,
        "vin": str,
        "miles": int,
    }


@pytest.fixture
def car_schema() -> Schema:
    return Schema(car_fields())


@pytest.fixture
def make_car_model():
    """Factory compiling a Car model with the plugin applied using ``options``."""

    def _make(**options):
        options.setdefault("fieldSuffix", SUFFIX)
        schema = Schema(car_fields()).plugin(last_modified_fields, options)
        return model("Car", schema)

    return _make


@pytest.fixture
def Car(make_car_model):
    return make_car_model(omittedFields=["vin"])


@pytest.fixture
def new_car(Car):
    return Car(make="Honda", model="Civic", vin="12345ABCDE", miles=20000)
