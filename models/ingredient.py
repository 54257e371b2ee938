"""
Ingredient Models

Contains the IngredientPrice model: one canonical price row per
ingredient, with optional cup/tablespoon/teaspoon equivalents.
"""

from services.catalog import PriceEntry
from .base import db


class IngredientPrice(db.Model):
    """
    Catalog price for an ingredient, merged from receipts.

    cups / tablespoons / teaspoons hold how many of each unit one
    purchased item (e.g. a 5 lb bag) contains. They are kept consistent
    with each other (1 cup = 16 tbsp = 48 tsp) whenever one is edited.
    """
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    size = db.Column(db.String(100), default='')

    # Price paid for one purchased item
    price = db.Column(db.Float, default=0.0)

    # Unit equivalents per purchased item (None until the user enters one)
    cups = db.Column(db.Float, nullable=True)
    tablespoons = db.Column(db.Float, nullable=True)
    teaspoons = db.Column(db.Float, nullable=True)

    def to_entry(self):
        return PriceEntry(
            name=self.name,
            size=self.size or '',
            price=self.price or 0.0,
            cups=self.cups,
            tablespoons=self.tablespoons,
            teaspoons=self.teaspoons,
            id=self.id,
        )

    def to_dict(self):
        return self.to_entry().to_dict()
