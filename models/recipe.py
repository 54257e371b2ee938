"""
Recipe Models

Contains the Recipe and RecipeItem models. Cost fields on Recipe are a
cache recomputed on every save, never edited directly.
"""

from .base import db


class Recipe(db.Model):
    """Recipe with ingredient lines, batch counts and cached cost fields."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, default='')
    items = db.relationship('RecipeItem', backref='recipe', lazy=True,
                            cascade='all, delete-orphan', order_by='RecipeItem.position')

    # Batch counts
    num_cookies = db.Column(db.Integer, nullable=True)
    cookies_per_tray = db.Column(db.Integer, nullable=True)

    # Derived (recomputed on every save)
    material_cost = db.Column(db.Float, default=0.0)
    retail_cost = db.Column(db.Float, default=0.0)
    store_price = db.Column(db.Float, default=0.0)
    trays_made = db.Column(db.Float, nullable=True)    # num_cookies / cookies_per_tray
    remaining_cookies = db.Column(db.Integer, nullable=True)

    # Packaging ids, weak references reconciled at read time
    selected_packaging = db.Column(db.JSON, default=list)

    def item_lines(self):
        return [f"{item.name}: {item.size}" for item in self.items]

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description or '',
            'items': [{'name': item.name, 'size': item.size} for item in self.items],
            'materialCost': self.material_cost,
            'retailCost': self.retail_cost,
            'storePrice': self.store_price,
            'numCookies': self.num_cookies,
            'cookiesPerTray': self.cookies_per_tray,
            'traysMade': self.trays_made,
            'remainingCookies': self.remaining_cookies,
            'selectedPackaging': list(self.selected_packaging or []),
        }


class RecipeItem(db.Model):
    """Ingredient line of a recipe; size holds '<quantity> <unit>'."""
    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id'), nullable=False, index=True)
    position = db.Column(db.Integer, default=0)
    name = db.Column(db.String(200), nullable=False)
    size = db.Column(db.String(100), nullable=False)
