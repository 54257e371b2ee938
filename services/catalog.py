"""
Ingredient Price Catalog

One canonical price entry per ingredient name, the highest price ever
seen for it, with derived per-cup/tablespoon/teaspoon prices.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from constants import (
    UNIT_EQUIVALENT_FIELDS,
    TABLESPOONS_PER_CUP,
    TEASPOONS_PER_TABLESPOON,
    TEASPOONS_PER_CUP,
)

from .errors import InvalidInput
from .parsing import parse_price


def normalize_name(name):
    """Catalog key for an ingredient, packaging or utensil name."""
    return (name or '').strip().lower()


@dataclass
class PriceEntry:
    name: str
    size: str = ''
    price: float = 0.0
    cups: float | None = None
    tablespoons: float | None = None
    teaspoons: float | None = None
    id: int | None = None

    @property
    def key(self):
        return normalize_name(self.name)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'size': self.size,
            'price': self.price,
            'cups': self.cups,
            'tablespoons': self.tablespoons,
            'teaspoons': self.teaspoons,
            'cupsPrice': price_per_unit(self, 'cups'),
            'tablespoonsPrice': price_per_unit(self, 'tablespoons'),
            'teaspoonsPrice': price_per_unit(self, 'teaspoons'),
        }


def should_replace(existing_prices, incoming_price):
    """
    Merge rule for ingestion: the incoming price wins only if it is
    strictly greater than every price already recorded for the name.
    """
    prices = [p for p in existing_prices if p is not None]
    if not prices:
        return True
    return incoming_price > max(prices)


def unit_equivalents(unit, value):
    """
    Derive all three unit equivalents from one of them.

    Args:
        unit: 'cups', 'tablespoons' or 'teaspoons'
        value: how many of that unit one purchased item holds

    Returns:
        dict with cups, tablespoons and teaspoons

    Raises:
        InvalidInput: unknown unit, or value not a positive number
    """
    if unit not in UNIT_EQUIVALENT_FIELDS:
        raise InvalidInput(f'Unknown unit field: {unit!r}')
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidInput('Please enter a positive number.') from None
    if not (value > 0 and math.isfinite(value)):
        raise InvalidInput('Please enter a positive number.')

    if unit == 'cups':
        return {
            'cups': value,
            'tablespoons': value * TABLESPOONS_PER_CUP,
            'teaspoons': value * TEASPOONS_PER_CUP,
        }
    if unit == 'tablespoons':
        return {
            'cups': value / TABLESPOONS_PER_CUP,
            'tablespoons': value,
            'teaspoons': value * TEASPOONS_PER_TABLESPOON,
        }
    return {
        'cups': value / TEASPOONS_PER_CUP,
        'tablespoons': value / TEASPOONS_PER_TABLESPOON,
        'teaspoons': value,
    }


def set_unit_equivalents(entry, unit, value):
    """Apply unit_equivalents() to an entry (catalog entry or database row)."""
    update = unit_equivalents(unit, value)
    for field, amount in update.items():
        setattr(entry, field, amount)
    return update


def price_per_unit(entry, unit):
    """
    Price of one cup/tablespoon/teaspoon of an ingredient.

    Returns None when the ingredient has no recorded equivalent for the
    unit yet, which is a normal 'unknown' state.
    """
    field = unit if unit in UNIT_EQUIVALENT_FIELDS else unit + 's'
    if field not in UNIT_EQUIVALENT_FIELDS:
        return None
    amount = getattr(entry, field, None)
    price = parse_price(getattr(entry, 'price', None))
    if not amount or price is None:
        return None
    return price / amount


def excluded_names(packaging=(), utensils=()):
    """Normalized packaging types and utensil names, kept out of ingredient views."""
    names = {normalize_name(p.type) for p in packaging if p.type}
    names.update(normalize_name(u.name) for u in utensils if u.name)
    return names


class PriceCatalog:
    """
    In-memory snapshot of canonical ingredient prices keyed by normalized name.

    Passed explicitly to the cost calculator so callers (and tests) can
    build one from any source.
    """

    def __init__(self, entries=None):
        self._entries = {}
        for entry in entries or ():
            self.add(entry)

    @classmethod
    def from_rows(cls, rows, exclude=()):
        """Build from database rows, skipping excluded names."""
        excluded = set(exclude)
        return cls(row.to_entry() for row in rows if normalize_name(row.name) not in excluded)

    def add(self, entry):
        """Insert an entry, keeping the existing one unless the new price is higher."""
        key = entry.key
        if not key:
            return False
        price = parse_price(entry.price)
        if price is None:
            return False
        current = self._entries.get(key)
        if current is not None and not should_replace([current.price], price):
            return False
        self._entries[key] = replace(entry, price=price)
        return True

    def lookup(self, name):
        return self._entries.get(normalize_name(name))

    def exclude(self, names):
        excluded = set(names)
        return PriceCatalog(e for key, e in self._entries.items() if key not in excluded)

    def __contains__(self, name):
        return normalize_name(name) in self._entries

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(sorted(self._entries.values(), key=lambda e: e.key))
