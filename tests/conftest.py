"""Shared fixtures: the app bound to an in-memory database, plus sample data."""

import os

os.environ['FLASK_ENV'] = 'testing'

import pytest

from app import app as flask_app
from models import db
from services import PriceCatalog, PriceEntry, NutritionFacts, set_unit_equivalents


@pytest.fixture
def app():
    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def catalog():
    flour = PriceEntry(name='Flour', size='5 lb', price=4.0)
    set_unit_equivalents(flour, 'cups', 20)
    sugar = PriceEntry(name='Sugar', size='4 lb', price=3.0)
    return PriceCatalog([flour, sugar])


@pytest.fixture
def facts():
    return {
        'flour': NutritionFacts(
            ingredient_name='flour', serving_size=1, serving_unit='cup',
            calories=455, total_fat=1.2, total_carbs=95.4, protein=12.9, iron=5.8,
        ),
        'sugar': NutritionFacts(
            ingredient_name='sugar', serving_size=100, serving_unit='gram',
            calories=387, total_carbs=100, total_sugars=100, added_sugars=100,
        ),
    }
