"""
Pytest configuration and fixtures for ruleforge tests

This module provides shared models, validators and instances for unit and
E2E tests.
"""
import pytest
from pydantic import BaseModel, Field

from ruleforge import Validator, ValidatorRegistry


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual rules, chains and validators"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests validating complete object graphs"
    )


# =======================
# MODELS
# =======================

class Address(BaseModel):
    street: str | None = None
    city: str | None = None
    country: str | None = None


class Person(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    age: int | None = None
    is_employed: bool = False
    company: str | None = None
    tags: list[str] = Field(default_factory=list)
    address: Address | None = None
    previous_addresses: list[Address] = Field(default_factory=list)


# =======================
# VALIDATORS
# =======================

class AddressValidator(Validator):
    def __init__(self, **options):
        super().__init__(**options)
        self.rule_for("street").not_empty().length(5, 100)
        self.rule_for("city").not_empty().length(2, 50)
        self.rule_for("country").not_empty().length(2, 50)


class PersonValidator(Validator):
    def __init__(self, address_validator: Validator, **options):
        super().__init__(**options)
        self.rule_for("first_name").not_empty().length(2, 50)
        self.rule_for("last_name").not_empty().length(2, 50)
        self.rule_for("email").not_empty().email()
        self.rule_for("address").not_empty().set_validator(address_validator)


# =======================
# FIXTURES
# =======================

@pytest.fixture
def address_validator() -> AddressValidator:
    """Validator for Address; metrics off to keep unit tests independent"""
    return AddressValidator(collect_metrics=False)


@pytest.fixture
def person_validator(address_validator) -> PersonValidator:
    """Validator for Person delegating the address to AddressValidator"""
    return PersonValidator(address_validator, collect_metrics=False)


@pytest.fixture
def valid_person() -> Person:
    """Person that satisfies every PersonValidator rule"""
    return Person(
        first_name="Jane",
        last_name="Doe",
        email="jane.doe@example.com",
        age=34,
        tags=["admin", "beta"],
        address=Address(street="221B Baker Street", city="London", country="UK"),
    )


@pytest.fixture
def invalid_person() -> Person:
    """Person breaking one rule per property, including nested address rules"""
    return Person(
        first_name="",
        last_name="D",
        email="bad",
        address=Address(street="", city="A", country=""),
    )


@pytest.fixture
def make_person_validator(address_validator):
    """Factory for PersonValidator with custom validator options"""
    def make(**options) -> PersonValidator:
        options.setdefault("collect_metrics", False)
        return PersonValidator(address_validator, **options)

    return make


@pytest.fixture
def validator_registry() -> ValidatorRegistry:
    """Registry wiring Person to a PersonValidator that reuses the Address validator"""
    registry = ValidatorRegistry()
    registry.register(Address, lambda: AddressValidator(collect_metrics=False))
    registry.register(Person, lambda: PersonValidator(registry.get_validator(Address), collect_metrics=False))
    return registry
