"""
Nutrition Models

Contains the NutritionFact model: nutrition values for one serving
basis of an ingredient, keyed by normalized ingredient name.
"""

from constants import NUTRIENT_KEYS, DEFAULT_SERVING_SIZE, DEFAULT_SERVING_UNIT
from services.nutrition import NutritionFacts
from .base import db


class NutritionFact(db.Model):
    """Per-serving nutrition facts. Not cascaded when the ingredient is deleted."""
    id = db.Column(db.Integer, primary_key=True)
    ingredient_name = db.Column(db.String(200), unique=True, nullable=False, index=True)

    # Serving basis the values below are declared per
    serving_size = db.Column(db.Float, default=DEFAULT_SERVING_SIZE)
    serving_unit = db.Column(db.String(20), default=DEFAULT_SERVING_UNIT)

    calories = db.Column(db.Float, default=0.0)
    total_fat = db.Column(db.Float, default=0.0)
    saturated_fat = db.Column(db.Float, default=0.0)
    trans_fat = db.Column(db.Float, default=0.0)
    cholesterol = db.Column(db.Float, default=0.0)   # mg
    sodium = db.Column(db.Float, default=0.0)        # mg
    total_carbs = db.Column(db.Float, default=0.0)
    dietary_fiber = db.Column(db.Float, default=0.0)
    total_sugars = db.Column(db.Float, default=0.0)
    added_sugars = db.Column(db.Float, default=0.0)
    protein = db.Column(db.Float, default=0.0)
    vitamin_d = db.Column(db.Float, default=0.0)     # mcg
    calcium = db.Column(db.Float, default=0.0)       # mg
    iron = db.Column(db.Float, default=0.0)          # mg
    potassium = db.Column(db.Float, default=0.0)     # mg

    def to_facts(self):
        values = {attr: getattr(self, attr) or 0.0 for attr in NUTRIENT_KEYS}
        return NutritionFacts(
            ingredient_name=self.ingredient_name,
            serving_size=self.serving_size or DEFAULT_SERVING_SIZE,
            serving_unit=self.serving_unit or DEFAULT_SERVING_UNIT,
            **values,
        )

    def to_dict(self):
        data = {
            'id': self.id,
            'ingredientName': self.ingredient_name,
            'servingSize': self.serving_size,
            'servingUnit': self.serving_unit,
        }
        for attr, key in NUTRIENT_KEYS.items():
            data[key] = getattr(self, attr)
        return data
