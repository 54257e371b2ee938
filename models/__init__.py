"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .ingredient import IngredientPrice
from .nutrition import NutritionFact
from .recipe import Recipe, RecipeItem
from .supplies import Packaging, Utensil
from .receipt import Receipt, ReceiptItem

__all__ = [
    'db',
    'IngredientPrice',
    'NutritionFact',
    'Recipe',
    'RecipeItem',
    'Packaging',
    'Utensil',
    'Receipt',
    'ReceiptItem',
]
