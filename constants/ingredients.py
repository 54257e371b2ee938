"""
Ingredient Constants

Ingredient-specific gram weights for the three volume units. These are
more accurate than the generic averages in units.py and are preferred
whenever the ingredient name matches exactly (case-insensitive).
"""

# Grams per cup / tablespoon / teaspoon
INGREDIENT_TO_G = {
    'sugar': {'cup': 200, 'tablespoon': 12.5, 'teaspoon': 4.2},
    'brown sugar': {'cup': 213, 'tablespoon': 13.3, 'teaspoon': 4.4},
    'flour': {'cup': 120, 'tablespoon': 7.5, 'teaspoon': 2.5},
    'butter': {'cup': 227, 'tablespoon': 14.2, 'teaspoon': 4.7},
    'oil': {'cup': 218, 'tablespoon': 13.6, 'teaspoon': 4.5},
    'milk': {'cup': 240, 'tablespoon': 15, 'teaspoon': 5},
    'water': {'cup': 240, 'tablespoon': 15, 'teaspoon': 5},
    'salt': {'cup': 273, 'tablespoon': 17, 'teaspoon': 6},
    'baking powder': {'cup': 192, 'tablespoon': 12, 'teaspoon': 4},
    'baking soda': {'cup': 220, 'tablespoon': 14, 'teaspoon': 4.6},
    'vanilla extract': {'cup': 208, 'tablespoon': 13, 'teaspoon': 4.3},
    'honey': {'cup': 340, 'tablespoon': 21, 'teaspoon': 7},
    'cocoa powder': {'cup': 85, 'tablespoon': 5.3, 'teaspoon': 1.8},
}
