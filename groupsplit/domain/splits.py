"""Split calculation for new expenses - equal, custom, percentage and share based"""

from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence
from groupsplit.domain.exceptions import InvalidExpenseError, InvalidSplitError
from groupsplit.domain.models import Split
from groupsplit.utils.money import EPSILON, from_cents, round2, to_cents


class SplitType(str, Enum):
    EQUAL = "equal"
    CUSTOM = "custom"
    PERCENTAGE = "percentage"
    SHARES = "shares"


def validate_splits(amount: float, splits: Sequence[Split], tolerance: float = EPSILON) -> None:
    """
    Check that splits sum to the expense amount.

    Raises:
        InvalidSplitError: If the sum differs from amount by more than tolerance
    """
    splits_sum = sum(split.amount for split in splits)
    if abs(splits_sum - amount) > tolerance:
        raise InvalidSplitError(
            f"Splits must sum to total amount. Got {round2(splits_sum)}, expected {amount}"
        )


def _require_positive(amount: float) -> int:
    if amount <= 0:
        raise InvalidExpenseError(f"Expense amount must be positive, got {amount}")
    return to_cents(amount)


def _absorb_remainder(member_ids: Sequence[str], cents: List[int], total_cents: int) -> List[Split]:
    # Last member with a non-zero share takes the rounding remainder,
    # or the last member when every share rounded down to zero
    remainder = total_cents - sum(cents)
    if remainder:
        nonzero = [i for i, c in enumerate(cents) if c > 0]
        cents[nonzero[-1] if nonzero else -1] += remainder

    return [Split(member_id=m, amount=from_cents(c)) for m, c in zip(member_ids, cents)]


def split_equally(amount: float, member_ids: Sequence[str]) -> List[Split]:
    """
    Split an amount equally: each share is rounded to the cent and the last
    member takes whatever is left.

    Example:
        100.00 over 3 -> [33.33, 33.33, 33.34]
        20.00 over 3 -> [6.67, 6.67, 6.66]
    """
    total_cents = _require_positive(amount)
    if not member_ids:
        raise InvalidSplitError("At least one member is required to split an expense")

    others = len(member_ids) - 1
    share = to_cents(amount / len(member_ids))
    if share * others > total_cents:
        # Rounding up would leave the last member a negative share
        share = total_cents // len(member_ids)

    splits = [Split(member_id=m, amount=from_cents(share)) for m in member_ids[:-1]]
    splits.append(Split(member_id=member_ids[-1], amount=from_cents(total_cents - share * others)))
    return splits


def split_by_percentage(
    amount: float,
    percentages: Mapping[str, float],
    tolerance: float = 0.1,
) -> List[Split]:
    """
    Split by percentage of the total; percentages must sum to 100 (within tolerance).
    """
    total_cents = _require_positive(amount)
    if any(pct < 0 for pct in percentages.values()):
        raise InvalidSplitError("Percentages cannot be negative")

    total_percentage = sum(percentages.values())
    if abs(total_percentage - 100) > tolerance:
        raise InvalidSplitError(f"Percentages must sum to 100%. Current sum: {total_percentage:.1f}%")

    member_ids = list(percentages)
    cents = [to_cents(amount * percentages[m] / 100) for m in member_ids]
    return _absorb_remainder(member_ids, cents, total_cents)


def split_by_shares(amount: float, shares: Mapping[str, float]) -> List[Split]:
    """
    Split proportionally to each member's number of shares.

    Example:
        90.00 with shares {a: 2, b: 1} -> [60.00, 30.00]
    """
    total_cents = _require_positive(amount)
    if any(s < 0 for s in shares.values()):
        raise InvalidSplitError("Shares cannot be negative")

    total_shares = sum(shares.values())
    if total_shares <= 0:
        raise InvalidSplitError("Please enter at least one share")

    amount_per_share = amount / total_shares
    member_ids = list(shares)
    cents = [to_cents(amount_per_share * shares[m]) for m in member_ids]
    return _absorb_remainder(member_ids, cents, total_cents)


def custom_splits(amount: float, amounts: Mapping[str, float], tolerance: float = EPSILON) -> List[Split]:
    """Explicit per-member amounts, validated against the total"""
    _require_positive(amount)
    if any(a < 0 for a in amounts.values()):
        raise InvalidSplitError("Split amounts cannot be negative")

    splits = [Split(member_id=m, amount=a) for m, a in amounts.items()]
    validate_splits(amount, splits, tolerance)
    return splits


def build_splits(
    split_type: SplitType,
    amount: float,
    member_ids: Sequence[str],
    values: Optional[Mapping[str, float]] = None,
    split_tolerance: float = EPSILON,
    percentage_tolerance: float = 0.1,
) -> List[Split]:
    """
    Build splits for an expense.

    For custom, percentage and shares, `values` maps member id to the amount,
    percent or share count. Members listed in `member_ids` without a value
    get 0; when `member_ids` is empty the keys of `values` are used.
    """
    split_type = SplitType(split_type)
    if split_type is SplitType.EQUAL:
        return split_equally(amount, member_ids)

    values = values or {}
    participants = list(member_ids) or list(values)
    ordered: Dict[str, float] = {m: values.get(m, 0.0) for m in participants}

    if split_type is SplitType.CUSTOM:
        return custom_splits(amount, ordered, split_tolerance)
    if split_type is SplitType.PERCENTAGE:
        return split_by_percentage(amount, ordered, percentage_tolerance)
    return split_by_shares(amount, ordered)
