"""Pytest configuration for agencyops API tests."""

from decimal import Decimal

import pytest
from django.utils import timezone

from django_fxmoney.models import ExchangeRateSnapshot
from django_fxmoney.services import clear_rate_cache


@pytest.fixture(autouse=True)
def empty_rate_cache():
    clear_rate_cache()
    yield
    clear_rate_cache()


@pytest.fixture
def employee(db, django_user_model):
    """Create a test employee."""
    return django_user_model.objects.create_user(
        username="employee",
        password="testpass123",
    )


@pytest.fixture
def staff_user(db, django_user_model):
    """Create a staff user for admin-only endpoints."""
    return django_user_model.objects.create_user(
        username="manager",
        password="testpass123",
        is_staff=True,
    )


@pytest.fixture
def stored_rates(db):
    """A fresh USD snapshot with 1 EUR = 1.1 USD and 1 TRY = 0.03 USD."""
    return ExchangeRateSnapshot.objects.create(
        base="USD",
        date=timezone.localdate(),
        rates={
            "USD": "1",
            "EUR": str(Decimal(1) / Decimal("1.1")),
            "TRY": str(Decimal(1) / Decimal("0.03")),
            "SAR": "3.75",
            "EGP": "49.5",
            "AED": "3.6725",
        },
        fetched_at=timezone.now(),
        source="test",
    )
