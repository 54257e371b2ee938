"""
Cost Calculation Service

Functions for calculating recipe material cost, tray counts, and the
retail and store prices derived from them.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from constants import COOKING_UNITS, RETAIL_MARKUP, STORE_MARKUP, MARGIN

from .errors import SkippedLine, SkipReason
from .parsing import parse_ingredient_line, parse_price

logger = logging.getLogger(__name__)


@dataclass
class LineCost:
    line: str
    name: str
    quantity: float
    unit: str
    unit_price: float
    cost: float


@dataclass
class CostBreakdown:
    total: float = 0.0
    lines: list[LineCost] = field(default_factory=list)
    skipped: list[SkippedLine] = field(default_factory=list)


@dataclass
class RecipePricing:
    per_tray_cost: float
    packaging_sum: float
    retail: float
    store: float


@dataclass
class RecipeCosting:
    material: CostBreakdown
    pricing: RecipePricing
    trays_made: float | None
    whole_trays: int | None
    remaining_cookies: int | None


def item_line(item):
    """Render a recipe item (string, dict or object with name/size) as 'Name: size'."""
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, dict):
        name, size = item.get('name'), item.get('size')
    else:
        name, size = getattr(item, 'name', None), getattr(item, 'size', None)
    return f"{(name or '').strip()}: {(size or '').strip()}"


def _skip(breakdown, line, reason, detail):
    logger.warning("Skipping %r: %s", line, detail)
    breakdown.skipped.append(SkippedLine(line, reason, detail))


def compute_material_cost(items, catalog):
    """
    Calculate the material cost of a recipe against a price catalog.

    Each item is parsed as 'Name: <qty> <cup|tablespoon|teaspoon>' and
    priced as catalog price / stored unit equivalent (1 when unset).
    Lines that fail to parse, are missing from the catalog, or carry an
    unusable price are skipped and reported; the total covers the rest.

    Args:
        items: recipe lines as strings, dicts or objects with name/size
        catalog: PriceCatalog snapshot

    Returns:
        CostBreakdown with total, priced lines and skipped lines
    """
    breakdown = CostBreakdown()

    for item in items:
        line = item_line(item)
        if not line:
            continue

        parsed = parse_ingredient_line(line)
        if parsed is None:
            _skip(breakdown, line, SkipReason.INVALID_FORMAT, 'Could not parse line')
            continue

        entry = catalog.lookup(parsed.name)
        if entry is None:
            _skip(breakdown, line, SkipReason.LOOKUP_MISS,
                  f'Ingredient not found in catalog: {parsed.name}')
            continue

        base_price = parse_price(entry.price)
        if base_price is None:
            _skip(breakdown, line, SkipReason.INVALID_PRICE,
                  f'Invalid price for {parsed.name}: {entry.price!r}')
            continue

        if parsed.unit not in COOKING_UNITS:
            _skip(breakdown, line, SkipReason.UNSUPPORTED_UNIT,
                  f'Unknown unit for {parsed.name}: {parsed.unit}')
            continue

        per_unit = base_price / (getattr(entry, parsed.unit + 's', None) or 1)
        cost = per_unit * parsed.quantity
        logger.debug("Ingredient: %s, Quantity: %s %s, Price per unit: $%.4f, Line cost: $%.4f",
                     parsed.name, parsed.quantity, parsed.unit, per_unit, cost)

        breakdown.lines.append(LineCost(
            line=line,
            name=parsed.name,
            quantity=parsed.quantity,
            unit=parsed.unit,
            unit_price=per_unit,
            cost=cost,
        ))
        breakdown.total += cost

    logger.debug("Total material cost calculated: $%.2f", breakdown.total)
    return breakdown


def packaging_unit_price(quantity, price):
    """Price of one packaging unit; 0 when the pack quantity is not positive."""
    quantity = parse_price(quantity) or 0
    price = parse_price(price) or 0
    if quantity <= 0:
        return 0.0
    return price / quantity


def compute_retail_and_store_price(material_cost, trays_made, packaging_unit_prices=()):
    """
    Apply the fixed markups to per-tray cost plus packaging.

    retail = (material / trays + packaging) * 2 * 1.3
    store  = (material / trays + packaging) * 1.5 * 1.3
    """
    trays = max(trays_made or 0, 1)
    per_tray_cost = (material_cost or 0) / trays
    packaging_sum = sum(packaging_unit_prices)
    base = per_tray_cost + packaging_sum
    return RecipePricing(
        per_tray_cost=per_tray_cost,
        packaging_sum=packaging_sum,
        retail=base * RETAIL_MARKUP * MARGIN,
        store=base * STORE_MARKUP * MARGIN,
    )


def _as_number(value):
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def compute_trays_and_remainder(num_cookies, cookies_per_tray):
    """
    Whole trays made and cookies left over.

    Returns (None, None) when either count is not a number or
    cookies_per_tray is zero.
    """
    cookies = _as_number(num_cookies)
    per_tray = _as_number(cookies_per_tray)
    if cookies is None or per_tray is None or per_tray == 0:
        return None, None
    return int(cookies // per_tray), int(cookies % per_tray)


def compute_trays_made(num_cookies, cookies_per_tray):
    """Exact number of trays (25 cookies at 12 per tray is 2.083...), or None."""
    cookies = _as_number(num_cookies)
    per_tray = _as_number(cookies_per_tray)
    if cookies is None or per_tray is None or per_tray == 0:
        return None
    return cookies / per_tray


def price_recipe(items, catalog, num_cookies=None, cookies_per_tray=None, packaging_unit_prices=()):
    """
    Recompute every derived cost field of a recipe from scratch.

    trays_made keeps the exact quotient; pricing divides by whole trays.
    """
    material = compute_material_cost(items, catalog)
    trays, remaining = compute_trays_and_remainder(num_cookies, cookies_per_tray)
    pricing = compute_retail_and_store_price(material.total, trays, packaging_unit_prices)
    return RecipeCosting(
        material=material,
        pricing=pricing,
        trays_made=compute_trays_made(num_cookies, cookies_per_tray),
        whole_trays=trays,
        remaining_cookies=remaining,
    )
