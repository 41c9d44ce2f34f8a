"""Unit classification and conversion for shopping list aggregation.

Free-text provider units are classified exactly once by ``classify_unit``
into a ``UnitClass`` (kind + factor to the base unit). Everything
downstream branches on ``UnitClass.kind`` only.

Base units: milliliters for volume, grams for weight. Count and unknown
amounts are never converted.
"""
from enum import Enum
from typing import NamedTuple, Tuple

from mealcart.utilities.constants import (
    COUNT_UNITS,
    VOLUME_CONVERSIONS,
    VOLUME_DISPLAY_FALLBACK,
    VOLUME_DISPLAY_STEPS,
    WEIGHT_CONVERSIONS,
    WEIGHT_DISPLAY_FALLBACK,
    WEIGHT_DISPLAY_STEPS,
)


class UnitKind(str, Enum):
    VOLUME = "volume"
    WEIGHT = "weight"
    COUNT = "count"
    UNKNOWN = "unknown"


# When one bucket holds several kinds only the first kind present here is reported.
KIND_PRECEDENCE: Tuple[UnitKind, ...] = (UnitKind.VOLUME, UnitKind.WEIGHT, UnitKind.COUNT, UnitKind.UNKNOWN)


class UnitClass(NamedTuple):
    kind: UnitKind
    factor: float = 1.0

    @property
    def convertible(self) -> bool:
        return self.kind in (UnitKind.VOLUME, UnitKind.WEIGHT)


def normalize_unit(unit) -> str:
    return (unit or '').strip().lower()


def classify_unit(unit) -> UnitClass:
    """Map a free-text unit onto volume, weight, count or unknown."""
    u = normalize_unit(unit)
    if u in VOLUME_CONVERSIONS:
        return UnitClass(UnitKind.VOLUME, VOLUME_CONVERSIONS[u])
    if u in WEIGHT_CONVERSIONS:
        return UnitClass(UnitKind.WEIGHT, WEIGHT_CONVERSIONS[u])
    if u in COUNT_UNITS:
        return UnitClass(UnitKind.COUNT)
    return UnitClass(UnitKind.UNKNOWN)


def to_base(amount: float, unit_class: UnitClass) -> float:
    '''Amount expressed in ml (volume) or g (weight); other kinds pass through.'''
    if unit_class.convertible:
        return amount * unit_class.factor
    return amount


def from_base(total: float, kind: UnitKind) -> Tuple[float, str]:
    """Pick the largest human unit that keeps the value at or above 1.

    Volume steps down L, cups, tbsp and falls back to tsp; weight steps
    down kg, lbs, oz and falls back to g.
    """
    if kind == UnitKind.VOLUME:
        steps, (divisor, label) = VOLUME_DISPLAY_STEPS, VOLUME_DISPLAY_FALLBACK
    elif kind == UnitKind.WEIGHT:
        steps, (divisor, label) = WEIGHT_DISPLAY_STEPS, WEIGHT_DISPLAY_FALLBACK
    else:
        raise ValueError(f"Only volume and weight amounts have a base unit, got {kind.value}")
    for threshold, step_divisor, step_label in steps:
        if total >= threshold:
            return total / step_divisor, step_label
    return total / divisor, label


__all__ = ['UnitKind', 'UnitClass', 'KIND_PRECEDENCE', 'normalize_unit', 'classify_unit', 'to_base', 'from_base']
