"""
Nutrition Service

Scales per-serving ingredient nutrition facts to the quantities used in
a recipe and sums them into a whole-recipe and per-serving label.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from constants import (
    NUTRIENT_KEYS,
    NUTRIENT_FIELDS,
    WHOLE_NUMBER_NUTRIENTS,
    DEFAULT_SERVING_SIZE,
    DEFAULT_SERVING_UNIT,
)

from .catalog import normalize_name
from .conversion import scale_factor
from .errors import SkippedLine, SkipReason
from .parsing import parse_size_field, parse_price

logger = logging.getLogger(__name__)


def empty_totals():
    return {name: 0.0 for name in NUTRIENT_FIELDS}


@dataclass
class NutritionFacts:
    """Nutrition values for one serving basis of an ingredient."""
    ingredient_name: str
    serving_size: float = DEFAULT_SERVING_SIZE
    serving_unit: str = DEFAULT_SERVING_UNIT
    calories: float = 0.0
    total_fat: float = 0.0
    saturated_fat: float = 0.0
    trans_fat: float = 0.0
    cholesterol: float = 0.0
    sodium: float = 0.0
    total_carbs: float = 0.0
    dietary_fiber: float = 0.0
    total_sugars: float = 0.0
    added_sugars: float = 0.0
    protein: float = 0.0
    vitamin_d: float = 0.0
    calcium: float = 0.0
    iron: float = 0.0
    potassium: float = 0.0

    @classmethod
    def from_document(cls, doc):
        """Build from a document with camelCase keys, applying the defaults."""
        serving_size = parse_price(doc.get('servingSize'))
        values = {
            'ingredient_name': normalize_name(doc.get('ingredientName')),
            'serving_size': serving_size if serving_size is not None else DEFAULT_SERVING_SIZE,
            'serving_unit': doc.get('servingUnit') or DEFAULT_SERVING_UNIT,
        }
        for attr, key in NUTRIENT_KEYS.items():
            values[attr] = parse_price(doc.get(key)) or 0.0
        return cls(**values)


@dataclass
class Contribution:
    name: str
    quantity: float
    unit: str
    scale_factor: float


@dataclass
class RecipeNutrition:
    total: dict = field(default_factory=empty_totals)
    skipped: list[SkippedLine] = field(default_factory=list)
    contributions: list[Contribution] = field(default_factory=list)


def _skip(result, line, reason, detail):
    logger.warning("Skipping %r: %s", line, detail)
    result.skipped.append(SkippedLine(line, reason, detail))


def _item_parts(item):
    if isinstance(item, str):
        name, _, size = item.partition(':')
        return name.strip(), size.strip()
    if isinstance(item, dict):
        return item.get('name') or '', item.get('size') or ''
    return getattr(item, 'name', '') or '', getattr(item, 'size', '') or ''


def compute_recipe_nutrition(items, facts):
    """
    Sum the nutrition of every recipe item that can be resolved.

    For each item the size is parsed, the fact looked up by normalized
    name, and the fact's values scaled by quantity used / serving basis.
    Unparseable sizes, missing facts and unusable scale factors are
    skipped and reported; they never abort the calculation.

    Args:
        items: recipe items ("Name: size" strings, dicts or objects with name and size)
        facts: mapping of normalized ingredient name -> NutritionFacts-like

    Returns:
        RecipeNutrition with totals, skipped lines and per-item factors
    """
    result = RecipeNutrition()

    for item in items:
        name, size = _item_parts(item)
        line = f"{name}: {size}"
        key = normalize_name(name)

        quantity = parse_size_field(size)
        if quantity is None:
            _skip(result, line, SkipReason.INVALID_FORMAT, f'Could not parse size: {size!r}')
            continue

        fact = facts.get(key)
        if fact is None:
            _skip(result, line, SkipReason.LOOKUP_MISS, f'No nutrition data for ingredient: {name}')
            continue

        serving_size = getattr(fact, 'serving_size', None) or DEFAULT_SERVING_SIZE
        serving_unit = getattr(fact, 'serving_unit', None) or DEFAULT_SERVING_UNIT
        factor = scale_factor(quantity.amount, quantity.unit, serving_size, serving_unit, key)

        if not factor or not math.isfinite(factor):
            _skip(result, line, SkipReason.NON_FINITE, f'Invalid scale factor: {factor}')
            continue

        for nutrient in NUTRIENT_FIELDS:
            result.total[nutrient] += (getattr(fact, nutrient, 0) or 0) * factor

        result.contributions.append(Contribution(key, quantity.amount, quantity.unit, factor))
        logger.debug("Added nutrition for %s, scale factor %.4f", key, factor)

    return result


def resolve_servings(override=None, num_cookies=None):
    """User override if positive, else the recipe's cookie count, else 1."""
    for candidate in (override, num_cookies):
        value = parse_price(candidate)
        if value is not None and value > 0:
            return value
    return 1


def compute_per_serving(total, servings):
    """Divide every nutrient by the serving count (non-positive counts as 1)."""
    value = parse_price(servings)
    if value is None or value <= 0:
        value = 1
    return {name: amount / value for name, amount in total.items()}


def _round_half_up(value, digits=0):
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def format_label(nutrition):
    """
    Rounded copy of a nutrition dict for display.

    Calories, cholesterol, sodium, calcium and potassium become whole
    numbers; the rest keep one decimal place.
    """
    label = {}
    for name, value in nutrition.items():
        if name in WHOLE_NUMBER_NUTRIENTS:
            label[name] = int(_round_half_up(value))
        else:
            label[name] = _round_half_up(value, 1)
    return label


def to_document(nutrition):
    """Rename snake_case nutrient keys to their document keys."""
    return {NUTRIENT_KEYS.get(name, name): value for name, value in nutrition.items()}
