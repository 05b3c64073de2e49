"""
Field validation for board input.

A Validatable bundles a value with the constraints it must satisfy.
Every constraint that is set must pass; constraints left as None are skipped.
Length bounds only apply to text, numeric bounds only to numbers.
"""
from dataclasses import dataclass
from numbers import Real
from typing import Optional, Union


@dataclass
class Validatable:
    value: Union[str, int, float]
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate(item: Validatable) -> bool:
    """Return True if item.value satisfies all configured constraints."""
    value = item.value
    is_valid = True

    if item.required:
        is_valid = is_valid and len(str(value).strip()) != 0

    if item.min_length is not None and isinstance(value, str):
        is_valid = is_valid and len(value) >= item.min_length

    if item.max_length is not None and isinstance(value, str):
        is_valid = is_valid and len(value) <= item.max_length

    # NaN fails both comparisons, so unparseable numbers never pass a bound
    if item.min is not None and _is_number(value):
        is_valid = is_valid and value >= item.min

    if item.max is not None and _is_number(value):
        is_valid = is_valid and value <= item.max

    return is_valid
