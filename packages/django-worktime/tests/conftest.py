"""Pytest configuration for django-worktime tests."""

import datetime

import pytest


@pytest.fixture
def employee(db, django_user_model):
    """Create a test employee."""
    return django_user_model.objects.create_user(
        username="employee",
        password="testpass123",
    )


@pytest.fixture
def other_employee(db, django_user_model):
    """Create another employee for multi-user tests."""
    return django_user_model.objects.create_user(
        username="otheremployee",
        password="testpass123",
    )


@pytest.fixture
def day():
    """The calendar day used by session tests."""
    return datetime.date(2025, 1, 15)
