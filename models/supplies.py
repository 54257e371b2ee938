"""
Supplies Models

Contains the Packaging and Utensil models. Their names are also used to
keep non-food rows out of the ingredient and nutrition views.
"""

from services.cost import packaging_unit_price
from .base import db


class Packaging(db.Model):
    """Packaging bought in packs; unit price is derived, never stored."""
    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(100), nullable=False)
    quantity = db.Column(db.Float, default=0.0)
    price = db.Column(db.Float, default=0.0)

    @property
    def unit_price(self):
        return packaging_unit_price(self.quantity, self.price)

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type,
            'quantity': self.quantity,
            'price': self.price,
            'pricePer': self.unit_price,
        }


class Utensil(db.Model):
    """Kitchen utensil inventory entry."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    quantity = db.Column(db.Float, nullable=True)
    condition = db.Column(db.String(50), default='')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'quantity': self.quantity,
            'condition': self.condition or '',
        }
