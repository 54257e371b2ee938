"""
Unit Conversion Service

Converts cooking quantities between volume units directly, or between
any supported units through a gram bridge using ingredient densities.
"""

import logging
import math

from constants import UNIT_ALIASES, VOLUME_TO_TSP, GENERIC_TO_G, INGREDIENT_TO_G

from .errors import UnsupportedUnit

logger = logging.getLogger(__name__)


def normalize_unit(raw):
    """
    Normalize a unit token to its canonical singular name.

    'Cups' -> 'cup', 'tbsp' -> 'tablespoon', 'TSPS' -> 'teaspoon', 'oz' -> 'ounce'.
    Unknown tokens are returned lower-cased and singular.
    """
    unit = (raw or '').strip().lower()
    if unit in UNIT_ALIASES:
        return UNIT_ALIASES[unit]
    if len(unit) > 1 and unit.endswith('s'):
        unit = unit[:-1]
    return UNIT_ALIASES.get(unit, unit)


def is_volume_unit(unit):
    return normalize_unit(unit) in VOLUME_TO_TSP


def convert_volume(amount, from_unit, to_unit):
    """
    Convert between teaspoons, tablespoons and cups.

    Same units return the amount untouched, so no rounding error is
    introduced for identity conversions.

    Raises:
        UnsupportedUnit: if either unit is not a volume unit
    """
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source not in VOLUME_TO_TSP or target not in VOLUME_TO_TSP:
        raise UnsupportedUnit(f'Cannot convert {from_unit!r} to {to_unit!r} by volume')
    if source == target:
        return amount

    in_teaspoons = amount * VOLUME_TO_TSP[source]
    return in_teaspoons / VOLUME_TO_TSP[target]


def convert_to_grams(amount, unit, ingredient_name=''):
    """
    Convert a quantity to grams.

    Ingredient-specific densities are tried first, then generic per-unit
    factors. An unrecognized unit is assumed to already be in grams and the
    amount is returned unchanged.
    """
    canonical = normalize_unit(unit)
    densities = INGREDIENT_TO_G.get((ingredient_name or '').strip().lower())
    if densities and canonical in densities:
        return amount * densities[canonical]

    if canonical in GENERIC_TO_G:
        return amount * GENERIC_TO_G[canonical]

    logger.debug("Unknown unit %r for %r, treating amount as grams", unit, ingredient_name)
    return amount


def _ratio(numerator, denominator):
    if not denominator:
        return math.nan
    return numerator / denominator


def scale_factor(quantity, unit, serving_size, serving_unit, ingredient_name=''):
    """
    Ratio between a consumed quantity and a nutrition serving basis.

    Conversion preference:
    1. Same unit (singular/plural aware): plain quantity ratio
    2. Both volume units: direct volume conversion
    3. Otherwise: bridge both sides through grams

    Returns NaN when the serving side converts to zero.
    """
    used = normalize_unit(unit)
    basis = normalize_unit(serving_unit)

    if used == basis:
        return _ratio(quantity, serving_size)

    if used in VOLUME_TO_TSP and basis in VOLUME_TO_TSP:
        return _ratio(convert_volume(quantity, used, basis), serving_size)

    grams_used = convert_to_grams(quantity, used, ingredient_name)
    serving_grams = convert_to_grams(serving_size, basis, ingredient_name)
    return _ratio(grams_used, serving_grams)
