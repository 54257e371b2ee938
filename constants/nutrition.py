"""
Nutrition Constants

Nutrient fields tracked per ingredient, their document keys, and the
display rules for nutrition labels.
"""

# Attribute name -> document key, in label order
NUTRIENT_KEYS = {
    'calories': 'calories',
    'total_fat': 'totalFat',
    'saturated_fat': 'saturatedFat',
    'trans_fat': 'transFat',
    'cholesterol': 'cholesterol',
    'sodium': 'sodium',
    'total_carbs': 'totalCarbs',
    'dietary_fiber': 'dietaryFiber',
    'total_sugars': 'totalSugars',
    'added_sugars': 'addedSugars',
    'protein': 'protein',
    'vitamin_d': 'vitaminD',
    'calcium': 'calcium',
    'iron': 'iron',
    'potassium': 'potassium',
}

NUTRIENT_FIELDS = tuple(NUTRIENT_KEYS)

# Shown as whole numbers on the label; everything else gets one decimal
WHOLE_NUMBER_NUTRIENTS = {'calories', 'cholesterol', 'sodium', 'calcium', 'potassium'}

# Label units
NUTRIENT_UNITS = {
    'calories': '',
    'total_fat': 'g',
    'saturated_fat': 'g',
    'trans_fat': 'g',
    'cholesterol': 'mg',
    'sodium': 'mg',
    'total_carbs': 'g',
    'dietary_fiber': 'g',
    'total_sugars': 'g',
    'added_sugars': 'g',
    'protein': 'g',
    'vitamin_d': 'mcg',
    'calcium': 'mg',
    'iron': 'mg',
    'potassium': 'mg',
}

# Serving units a nutrition fact may be declared in
SERVING_UNITS = {'cup', 'tablespoon', 'teaspoon', 'gram', 'ounce'}

DEFAULT_SERVING_SIZE = 1.0
DEFAULT_SERVING_UNIT = 'gram'
