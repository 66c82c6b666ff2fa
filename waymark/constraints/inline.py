"""
Built-in inline route constraints.

Every class here is tagged InlineRouteConstraint and is registered by name
when a RoutingConfiguration is built: ``IntRouteConstraint`` is available as
``int``, ``LengthRouteConstraint`` as ``length`` and so on.

Constructor parameters usually come straight out of a route template, so
they arrive as strings and are coerced here. A value that cannot be coerced
raises ValueError, which the constraint factory reports as a
MisconfiguredConstraintFault.
"""

import decimal
import math
import re
import uuid
from datetime import datetime
from typing import Optional, Union

from .base import InlineRouteConstraint, ValueRouteConstraint
from ..faults import InvalidPatternFault

Number = Union[int, str]

_INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)

INT32_RANGE = (-(2 ** 31), 2 ** 31 - 1)
INT64_RANGE = (-(2 ** 63), 2 ** 63 - 1)


def _to_int(value: Number) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not _INTEGER_RE.fullmatch(text):
        raise ValueError(f"Expected an integer, got {value!r}")
    return int(text)


def _parse_int(value: str, bounds=INT64_RANGE):
    """Parse an integer within ``bounds``; None when it is not one."""
    if not _INTEGER_RE.fullmatch(value):
        return None
    parsed = int(value)
    if not bounds[0] <= parsed <= bounds[1]:
        return None
    return parsed


# ============================================================================
# Pattern
# ============================================================================

class RegexRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):
    """
    Value must fully match a regular expression.

    The pattern is compiled eagerly so a malformed pattern fails at
    configuration time with InvalidPatternFault.
    """

    def __init__(self, pattern: str, flags: int = 0):
        self.pattern = pattern
        self.flags = flags
        try:
            self.compiled = re.compile(pattern, flags)
        except re.error as e:
            raise InvalidPatternFault(pattern, str(e)) from e

    def is_valid(self, value: str) -> bool:
        return self.compiled.fullmatch(value) is not None

    def __repr__(self) -> str:
        return f"RegexRouteConstraint({self.pattern!r})"


class AlphaRouteConstraint(RegexRouteConstraint):
    """Letters a-z and A-Z only."""

    def __init__(self):
        super().__init__(r"[a-zA-Z]*")


# ============================================================================
# Types
# ============================================================================

class BoolRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):

    def is_valid(self, value: str) -> bool:
        return value.lower() in ("true", "false")


class DateTimeRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):
    """ISO 8601 date or date-time."""

    def is_valid(self, value: str) -> bool:
        try:
            datetime.fromisoformat(value)
        except ValueError:
            return False
        return True


class DecimalRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):

    def is_valid(self, value: str) -> bool:
        try:
            parsed = decimal.Decimal(value)
        except decimal.InvalidOperation:
            return False
        return parsed.is_finite()


class DoubleRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):

    def is_valid(self, value: str) -> bool:
        try:
            parsed = float(value)
        except ValueError:
            return False
        return math.isfinite(parsed)


class FloatRouteConstraint(DoubleRouteConstraint):
    pass


class GuidRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):

    def is_valid(self, value: str) -> bool:
        try:
            uuid.UUID(value)
        except ValueError:
            return False
        return True


class IntRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):
    """32-bit signed integer."""

    def is_valid(self, value: str) -> bool:
        return _parse_int(value, INT32_RANGE) is not None


class LongRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):
    """64-bit signed integer."""

    def is_valid(self, value: str) -> bool:
        return _parse_int(value, INT64_RANGE) is not None


# ============================================================================
# Length
# ============================================================================

class LengthRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):
    """
    ``length(n)`` requires exactly n characters,
    ``length(min, max)`` requires between min and max inclusive.
    """

    def __init__(self, length: Number, max_length: Optional[Number] = None):
        if max_length is None:
            self.min_length = self.max_length = _to_int(length)
        else:
            self.min_length = _to_int(length)
            self.max_length = _to_int(max_length)
        if self.min_length > self.max_length:
            raise ValueError(f"length({self.min_length}, {self.max_length}) is an empty range")

    def is_valid(self, value: str) -> bool:
        return self.min_length <= len(value) <= self.max_length


class MinLengthRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):

    def __init__(self, min_length: Number):
        self.min_length = _to_int(min_length)

    def is_valid(self, value: str) -> bool:
        return len(value) >= self.min_length


class MaxLengthRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):

    def __init__(self, max_length: Number):
        self.max_length = _to_int(max_length)

    def is_valid(self, value: str) -> bool:
        return len(value) <= self.max_length


# ============================================================================
# Numeric range
# ============================================================================

class MinRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):
    """Integer no smaller than ``min_value``."""

    def __init__(self, min_value: Number):
        self.min_value = _to_int(min_value)

    def is_valid(self, value: str) -> bool:
        parsed = _parse_int(value)
        return parsed is not None and parsed >= self.min_value


class MaxRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):
    """Integer no larger than ``max_value``."""

    def __init__(self, max_value: Number):
        self.max_value = _to_int(max_value)

    def is_valid(self, value: str) -> bool:
        parsed = _parse_int(value)
        return parsed is not None and parsed <= self.max_value


class RangeRouteConstraint(ValueRouteConstraint, InlineRouteConstraint):
    """Integer between ``min_value`` and ``max_value`` inclusive."""

    def __init__(self, min_value: Number, max_value: Number):
        self.min_value = _to_int(min_value)
        self.max_value = _to_int(max_value)

    def is_valid(self, value: str) -> bool:
        parsed = _parse_int(value)
        return parsed is not None and self.min_value <= parsed <= self.max_value
