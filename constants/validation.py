"""
Validation Constants

Contains whitelist values and limits for validating user input.
"""

# Catalogs an ingredient row can be moved into
VALID_MOVE_TARGETS = {'packaging', 'utensils'}

# Maximum field lengths
MAX_LENGTHS = {
    'ingredient_name': 200,
    'ingredient_size': 100,
    'recipe_name': 200,
    'description': 5000,
    'recipe_item': 500,
    'packaging_type': 100,
    'utensil_name': 100,
    'vendor': 200,
    'invoice': 100,
}
