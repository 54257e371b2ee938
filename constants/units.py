"""
Unit Constants and Conversion Tables

Contains the closed set of cooking units, abbreviation mappings, and
the conversion factors used for costing and nutrition scaling.
"""

# Canonical unit tokens
CUP = 'cup'
TABLESPOON = 'tablespoon'
TEASPOON = 'teaspoon'
GRAM = 'gram'
KILOGRAM = 'kilogram'
OUNCE = 'ounce'
POUND = 'pound'

# Units accepted in recipe ingredient lines (and priced by the catalog)
COOKING_UNITS = (CUP, TABLESPOON, TEASPOON)

# Abbreviations after the trailing plural 's' has been stripped
UNIT_ALIASES = {
    'tbsp': TABLESPOON,
    'tbs': TABLESPOON,
    'tsp': TEASPOON,
    'g': GRAM,
    'kg': KILOGRAM,
    'oz': OUNCE,
    'lb': POUND,
}

# Volume conversions, in teaspoons
VOLUME_TO_TSP = {
    TEASPOON: 1,
    TABLESPOON: 3,    # 1 tbsp = 3 tsp
    CUP: 48,          # 1 cup = 48 tsp = 16 tbsp
}

# Generic grams per unit, used when no ingredient-specific density is known
GENERIC_TO_G = {
    CUP: 120,
    TABLESPOON: 15,
    TEASPOON: 5,
    GRAM: 1,
    KILOGRAM: 1000,
    OUNCE: 28.35,
    POUND: 453.592,
}

# Catalog unit-equivalent fields (how many of each are in one purchased unit)
UNIT_EQUIVALENT_FIELDS = {
    'cups': CUP,
    'tablespoons': TABLESPOON,
    'teaspoons': TEASPOON,
}

TABLESPOONS_PER_CUP = 16
TEASPOONS_PER_TABLESPOON = 3
TEASPOONS_PER_CUP = 48
