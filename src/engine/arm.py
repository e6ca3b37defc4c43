"""Adjustable-rate track: ordered rate changes and payment recasts.

Pure functions. No I/O.
"""

import logging
from decimal import Decimal

from src.engine.dates import absolute_month, clamp_month_index
from src.engine.payment import ZERO, non_negative, non_negative_int
from src.models.inputs import ArmPreset, ArmRateChange, MortgageInputs

logger = logging.getLogger(__name__)

# (fixed-rate months, months between resets)
ARM_PRESETS: dict[ArmPreset, tuple[int, int]] = {
    ArmPreset.FIVE_ONE: (60, 12),
    ArmPreset.SEVEN_SIX: (84, 6),
    ArmPreset.FIVE_SIX: (60, 6),
}

# Percentage-point caps
DEFAULT_INITIAL_CAP = Decimal("2")
DEFAULT_PERIODIC_CAP = Decimal("1")
DEFAULT_LIFETIME_CAP = Decimal("5")


def rate_change_track(inputs: MortgageInputs) -> tuple[ArmRateChange, ...]:
    """Rate changes sorted by effective month, or () when the loan behaves as fixed."""
    if not inputs.uses_arm:
        if inputs.arm_rate_changes:
            logger.debug(
                "Ignoring %d ARM rate changes (interest type %s, valid=%s)",
                len(inputs.arm_rate_changes),
                inputs.interest_type.value,
                inputs.arm_rate_changes_valid,
            )
        return ()
    return tuple(sorted(inputs.arm_rate_changes, key=lambda c: c.effective_month))


def due_rate_changes(
    track: tuple[ArmRateChange, ...], cursor: int, month: int
) -> tuple[list[ArmRateChange], int]:
    """Changes effective in ``month`` starting at ``cursor``, and the advanced cursor.

    Changes dated before ``month`` were never reachable (they precede the loan
    start) and are skipped without being applied.
    """
    due: list[ArmRateChange] = []
    while cursor < len(track) and track[cursor].effective_month <= month:
        change = track[cursor]
        if change.effective_month == month:
            due.append(change)
        else:
            logger.debug("Skipping ARM change dated before the schedule: %s", change)
        cursor += 1
    return due, cursor


def remaining_term(term_months: int, months_elapsed: int) -> int:
    return max(1, term_months - months_elapsed)


def _next_rate(
    current: Decimal,
    target: Decimal,
    cap: Decimal,
    ceiling: Decimal,
) -> Decimal:
    rate = max(current - cap, min(current + cap, target))
    return max(ZERO, min(rate, ceiling))


def build_arm_preset(
    preset: ArmPreset,
    start_month_index: int,
    start_year: int,
    term_months: int,
    initial_rate_percent: Decimal,
    fully_indexed_rate_percent: Decimal,
    initial_cap: Decimal = DEFAULT_INITIAL_CAP,
    periodic_cap: Decimal = DEFAULT_PERIODIC_CAP,
    lifetime_cap: Decimal = DEFAULT_LIFETIME_CAP,
) -> tuple[ArmRateChange, ...]:
    """Generate the rate changes for a standard hybrid ARM.

    After the fixed period the rate moves toward the fully indexed rate at each
    reset, limited by the initial cap on the first reset, the periodic cap on
    later resets, and the lifetime cap over the initial rate. Resets that leave
    the rate unchanged are not emitted.
    """
    if preset is ArmPreset.CUSTOM:
        return ()

    fixed_months, interval = ARM_PRESETS[preset]
    term = non_negative_int(term_months)
    start = absolute_month(clamp_month_index(start_month_index), non_negative_int(start_year))
    initial = non_negative(initial_rate_percent)
    target = non_negative(fully_indexed_rate_percent)
    ceiling = initial + non_negative(lifetime_cap)

    changes: list[ArmRateChange] = []
    rate = initial
    offset = fixed_months
    first = True
    while offset < term:
        cap = non_negative(initial_cap if first else periodic_cap)
        new_rate = _next_rate(rate, target, cap, ceiling)
        if new_rate != rate:
            changes.append(ArmRateChange(effective_month=start + offset, annual_rate_percent=new_rate))
            rate = new_rate
        first = False
        offset += interval
    return tuple(changes)
