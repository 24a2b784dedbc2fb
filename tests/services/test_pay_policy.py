"""Tests for pay-type precedence."""
from __future__ import annotations

import itertools

import pytest

from crm_payroll.services.pay_policy import get_effective_pay_type, resolve_flat_rate


@pytest.mark.parametrize(
    ("user_default", "user_type"),
    list(itertools.product([None, "hourly", "flat_rate"], [None, "staff", "white_label"])),
)
@pytest.mark.parametrize("override", ["hourly", "flat_rate"])
def test_assignment_override_always_wins(user_default, user_type, override) -> None:
    assert get_effective_pay_type(user_default, user_type, override) == override


@pytest.mark.parametrize("user_type", [None, "staff", "white_label"])
@pytest.mark.parametrize("user_default", ["hourly", "flat_rate"])
def test_user_default_beats_user_type_fallback(user_default, user_type) -> None:
    assert get_effective_pay_type(user_default, user_type, None) == user_default


@pytest.mark.parametrize(
    ("user_type", "expected"),
    [("staff", "hourly"), ("white_label", "flat_rate"), (None, "hourly")],
)
def test_user_type_fallback(user_type, expected) -> None:
    assert get_effective_pay_type(None, user_type, None) == expected


def test_resolve_flat_rate_prefers_override() -> None:
    assert resolve_flat_rate(150.0, 90.0) == 150.0


def test_resolve_flat_rate_keeps_explicit_zero_override() -> None:
    assert resolve_flat_rate(0.0, 90.0) == 0.0


def test_resolve_flat_rate_falls_back_to_user_default_then_zero() -> None:
    assert resolve_flat_rate(None, 90.0) == 90.0
    assert resolve_flat_rate(None, None) == 0.0
