"""Pay-type policy for individual assignments."""
from __future__ import annotations

from crm_payroll.schemas.payroll import PayType, UserType

_USER_TYPE_FALLBACK: dict[str, PayType] = {
    "staff": "hourly",
    "white_label": "flat_rate",
}


def get_effective_pay_type(
    user_pay_type: PayType | None,
    user_type: UserType | None,
    assignment_override: PayType | None,
) -> PayType:
    """Resolve how one assignment is paid.

    Precedence: the assignment override, then the user's default pay type,
    then the user-type fallback (staff are hourly, white-label workers are
    flat rate, unknown types are treated as staff).
    """
    if assignment_override:
        return assignment_override
    if user_pay_type:
        return user_pay_type
    return _USER_TYPE_FALLBACK.get(user_type or "staff", "hourly")


def resolve_flat_rate(override_amount: float | None, user_default: float | None) -> float:
    if override_amount is not None:
        return float(override_amount)
    if user_default is not None:
        return float(user_default)
    return 0.0
