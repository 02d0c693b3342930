"""Test configuration and fixtures."""

import numbers

import pytest

from hamachi import Field, Interval, Model, schema, types
from hamachi import config


class OddNumber(Field):
    """Custom field type used across the tests."""

    def matches(self, value):
        return super().matches(value) and value % 2 == 1

    def default_value(self):
        return 1

    def describe(self):
        return "odd number"


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Run every test against default settings, whatever the environment says."""
    monkeypatch.setattr(config, "settings", config.Settings(_env_file=None))


@pytest.fixture
def model():
    """Anonymous person model."""
    return schema(
        name=str,
        gender=types.enum("male", "female"),
        age=Interval(1, 100),
    )


@pytest.fixture
def anna(model) -> Model:
    """A valid instance of the person model."""
    return model({"name": "Anna", "gender": "female", "age": 29})


@pytest.fixture
def odd_number() -> Field:
    return OddNumber(int)


@pytest.fixture
def odd_numeric() -> Field:
    return OddNumber(numbers.Number)


@pytest.fixture
def order_model():
    """Anonymous model with has-one and has-many nested models."""
    return schema(
        name=str,
        address=schema(street=str, city=str),
        items=types.list(schema(name=str, price=float)),
    )


@pytest.fixture
def annas_order() -> str:
    return """{
        "name": "Anna",
        "address": {
            "street": "834 Oak Street",
            "city": "Roseville"
        },
        "items": [
            { "name": "Handmade Linen Apron", "price": 45.00 },
            { "name": "Mason Jar Measuring Cups", "price": 24.99 },
            { "name": "Wildflower Seeds", "price": 12.99 }
        ]
    }"""
