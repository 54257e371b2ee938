"""
Constants Package

Unit tables, ingredient densities, nutrient fields, pricing markups
and validation whitelists.
"""

from .units import (
    CUP,
    TABLESPOON,
    TEASPOON,
    GRAM,
    KILOGRAM,
    OUNCE,
    POUND,
    COOKING_UNITS,
    UNIT_ALIASES,
    VOLUME_TO_TSP,
    GENERIC_TO_G,
    UNIT_EQUIVALENT_FIELDS,
    TABLESPOONS_PER_CUP,
    TEASPOONS_PER_TABLESPOON,
    TEASPOONS_PER_CUP,
)

from .ingredients import INGREDIENT_TO_G

from .nutrition import (
    NUTRIENT_KEYS,
    NUTRIENT_FIELDS,
    NUTRIENT_UNITS,
    WHOLE_NUMBER_NUTRIENTS,
    SERVING_UNITS,
    DEFAULT_SERVING_SIZE,
    DEFAULT_SERVING_UNIT,
)

from .pricing import RETAIL_MARKUP, STORE_MARKUP, MARGIN

from .validation import VALID_MOVE_TARGETS, MAX_LENGTHS
