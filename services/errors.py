"""
Costing Errors

Exceptions raised at the input boundary, and the per-line skip records
returned by the aggregate calculations (which never raise).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CostingError(Exception):
    """Base class for costing and nutrition errors."""


class InvalidFormat(CostingError, ValueError):
    """Unparseable quantity or ingredient line."""


class InvalidInput(CostingError, ValueError):
    """Non-positive or non-numeric value given to a setter."""


class UnsupportedUnit(CostingError, ValueError):
    """Unit outside the set an operation accepts."""


class LookupMiss(CostingError, LookupError):
    """Ingredient, nutrition fact or packaging entry not found."""


class SkipReason(Enum):
    INVALID_FORMAT = 'invalid_format'
    LOOKUP_MISS = 'lookup_miss'
    INVALID_PRICE = 'invalid_price'
    UNSUPPORTED_UNIT = 'unsupported_unit'
    NON_FINITE = 'non_finite'


@dataclass(frozen=True)
class SkippedLine:
    line: str
    reason: SkipReason
    detail: str = ''

    def to_dict(self):
        return {'line': self.line, 'reason': self.reason.value, 'detail': self.detail}
