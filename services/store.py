"""
Store Service

Database side of the catalog and recipe operations: loads read-only
snapshots for the pure calculators, applies ingestion merges, and saves
recipes with every derived field recomputed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict

from sqlalchemy import func

from constants import NUTRIENT_KEYS, SERVING_UNITS, DEFAULT_SERVING_SIZE, DEFAULT_SERVING_UNIT
from models import (
    db,
    IngredientPrice,
    NutritionFact,
    Recipe,
    RecipeItem,
    Packaging,
    Utensil,
    Receipt,
    ReceiptItem,
)

from .catalog import PriceCatalog, excluded_names, normalize_name, should_replace
from .conversion import normalize_unit
from .cost import price_recipe
from .errors import InvalidInput, LookupMiss
from .nutrition import compute_recipe_nutrition, compute_per_serving, resolve_servings
from .parsing import INGREDIENT_LINE_RE, parse_ingredient_line, parse_price, format_amount

logger = logging.getLogger(__name__)


@dataclass
class IngestSummary:
    inserted: int = 0
    replaced: int = 0
    discarded: int = 0
    deleted: int = 0
    skipped: int = 0

    def to_dict(self):
        return asdict(self)


# ============================================
# SNAPSHOTS
# ============================================

def load_exclusions():
    """Names of packaging and utensils, recomputed per load."""
    return excluded_names(Packaging.query.all(), Utensil.query.all())


def load_price_catalog():
    """Canonical ingredient prices, with packaging and utensil names left out."""
    return PriceCatalog.from_rows(IngredientPrice.query.all(), exclude=load_exclusions())


def load_nutrition_facts():
    """Nutrition facts keyed by normalized ingredient name."""
    return {normalize_name(f.ingredient_name): f.to_facts() for f in NutritionFact.query.all()}


def lookup_price(name):
    return load_price_catalog().lookup(name)


def ingredient_rows():
    """Ingredient rows for the ingredients view, one per name, sorted."""
    return list(load_price_catalog())


# ============================================
# INGESTION
# ============================================

def _same_name_rows(name):
    return (IngredientPrice.query
            .filter(func.lower(func.trim(IngredientPrice.name)) == normalize_name(name))
            .all())


def ingest(items):
    """
    Merge ingredient items (name, size, price) into the price catalog.

    For each item: insert when the name is new; when the incoming price is
    strictly greater than every recorded price for the name, overwrite the
    highest-priced row and delete the other same-name rows; otherwise
    discard the item. All changes are committed together.

    Returns:
        IngestSummary counts
    """
    summary = IngestSummary()
    try:
        for item in items:
            name = (item.get('name') or '').strip()
            price = parse_price(item.get('price'))
            if not name or price is None:
                logger.warning("Skipping ingredient item without name or price: %r", item)
                summary.skipped += 1
                continue

            size = (item.get('size') or '').strip()
            existing = _same_name_rows(name)
            if not existing:
                db.session.add(IngredientPrice(name=name, size=size, price=price))
                db.session.flush()
                summary.inserted += 1
                continue

            if not should_replace([row.price for row in existing], price):
                summary.discarded += 1
                continue

            highest = max(existing, key=lambda row: row.price if row.price is not None else float('-inf'))
            highest.size = size
            highest.price = price
            for row in existing:
                if row.id != highest.id:
                    db.session.delete(row)
                    summary.deleted += 1
            db.session.flush()
            summary.replaced += 1

        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info("Ingested ingredients: %s", summary.to_dict())
    return summary


def rebuild_catalog_from_receipts():
    """Delete every ingredient row and re-ingest all receipt items."""
    items = [
        {'name': item.name, 'size': item.size or '', 'price': item.price}
        for item in ReceiptItem.query.order_by(ReceiptItem.receipt_id, ReceiptItem.position).all()
        if item.name and item.price
    ]
    IngredientPrice.query.delete()
    db.session.flush()
    logger.info("Rebuilding ingredient catalog from %d receipt items", len(items))
    return ingest(items)


def move_ingredient(ingredient, target):
    """Move an ingredient row into the packaging or utensil catalog."""
    if target == 'packaging':
        db.session.add(Packaging(type=ingredient.name, quantity=1, price=ingredient.price or 0.0))
    elif target == 'utensils':
        db.session.add(Utensil(name=ingredient.name, quantity=1))
    else:
        raise InvalidInput(f'Invalid target: {target}')
    db.session.delete(ingredient)
    db.session.commit()


# ============================================
# NUTRITION FACTS
# ============================================

def upsert_nutrition_fact(ingredient_name, data):
    """
    Create or replace the nutrition fact for a normalized ingredient name.

    Args:
        ingredient_name: ingredient name (normalized before lookup)
        data: document-style dict (servingSize, servingUnit, calories, ...)
    """
    key = normalize_name(ingredient_name)
    if not key:
        raise InvalidInput('Ingredient name is required')

    raw_unit = data.get('servingUnit')
    if raw_unit in (None, ''):
        raw_unit = DEFAULT_SERVING_UNIT
    if not isinstance(raw_unit, str):
        raise InvalidInput(f'Invalid serving unit: {raw_unit!r}')
    serving_unit = normalize_unit(raw_unit)
    if serving_unit not in SERVING_UNITS:
        raise InvalidInput(f'Invalid serving unit: {raw_unit}')

    serving_size = parse_price(data.get('servingSize'))
    if serving_size is None:
        serving_size = DEFAULT_SERVING_SIZE
    elif serving_size <= 0:
        raise InvalidInput('Serving size must be a positive number')

    fact = NutritionFact.query.filter_by(ingredient_name=key).first()
    if fact is None:
        fact = NutritionFact(ingredient_name=key)
        db.session.add(fact)

    fact.serving_size = serving_size
    fact.serving_unit = serving_unit
    for attr, doc_key in NUTRIENT_KEYS.items():
        setattr(fact, attr, parse_price(data.get(doc_key)) or 0.0)

    db.session.commit()
    return fact


def nutrition_rows():
    """Catalog ingredients (minus packaging/utensils) merged with their facts."""
    facts = {normalize_name(f.ingredient_name): f for f in NutritionFact.query.all()}
    rows = []
    for entry in load_price_catalog():
        fact = facts.get(entry.key)
        if fact is not None:
            rows.append(fact.to_dict())
        else:
            row = {'id': None, 'ingredientName': entry.key,
                   'servingSize': DEFAULT_SERVING_SIZE, 'servingUnit': DEFAULT_SERVING_UNIT}
            row.update({key: 0.0 for key in NUTRIENT_KEYS.values()})
            rows.append(row)
    return rows


def recipe_nutrition(recipe_id, servings=None):
    """
    Total and per-serving nutrition for a stored recipe.

    Raises:
        LookupMiss: if the recipe does not exist
    """
    recipe = db.session.get(Recipe, recipe_id)
    if recipe is None:
        raise LookupMiss(f'Recipe not found: {recipe_id}')

    result = compute_recipe_nutrition(recipe.items, load_nutrition_facts())
    count = resolve_servings(servings, recipe.num_cookies)
    return recipe, result, count, compute_per_serving(result.total, count)


# ============================================
# RECIPES
# ============================================

def parse_recipe_lines(lines):
    """
    Split recipe text lines into items and invalid lines.

    Returns:
        (items, invalid) where items are {'name', 'size'} dicts
    """
    items, invalid = [], []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        parsed = parse_ingredient_line(line)
        if parsed is None:
            invalid.append(line)
            continue
        unit = INGREDIENT_LINE_RE.match(line).group(3).lower()
        items.append({
            'name': parsed.display_name,
            'size': f"{format_amount(parsed.quantity)} {unit}",
        })
    return items, invalid


def resolve_packaging(packaging_ids):
    """Selected packaging rows; ids that no longer exist are logged and dropped."""
    resolved = []
    for packaging_id in packaging_ids or []:
        packaging = db.session.get(Packaging, packaging_id)
        if packaging is None:
            logger.warning("Packaging %r selected but not found", packaging_id)
            continue
        resolved.append(packaging)
    return resolved


def recompute_recipe(recipe, catalog=None):
    """Recalculate every derived field of a recipe from its current inputs."""
    if catalog is None:
        catalog = load_price_catalog()
    packaging = resolve_packaging(recipe.selected_packaging)
    costing = price_recipe(
        recipe.item_lines(),
        catalog,
        num_cookies=recipe.num_cookies,
        cookies_per_tray=recipe.cookies_per_tray,
        packaging_unit_prices=[p.unit_price for p in packaging],
    )
    recipe.material_cost = costing.material.total
    recipe.retail_cost = costing.pricing.retail
    recipe.store_price = costing.pricing.store
    recipe.trays_made = costing.trays_made
    recipe.remaining_cookies = costing.remaining_cookies
    return costing


def save_recipe(recipe, name, description, items, num_cookies=None, cookies_per_tray=None,
                selected_packaging=None):
    """
    Replace a recipe's inputs, recompute its cost fields and commit.

    Args:
        recipe: existing Recipe, or None to create one
        items: list of {'name', 'size'} dicts (see parse_recipe_lines)
    """
    if recipe is None:
        recipe = Recipe()
        db.session.add(recipe)

    recipe.name = name
    recipe.description = description
    recipe.num_cookies = num_cookies
    recipe.cookies_per_tray = cookies_per_tray
    recipe.selected_packaging = [int(pid) for pid in selected_packaging or []]
    recipe.items = [
        RecipeItem(position=position, name=item['name'], size=item['size'])
        for position, item in enumerate(items)
    ]

    costing = recompute_recipe(recipe)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return recipe, costing


def recompute_all_recipes():
    """Refresh cached costs of every recipe against one catalog snapshot."""
    catalog = load_price_catalog()
    recipes = Recipe.query.all()
    for recipe in recipes:
        recompute_recipe(recipe, catalog)
    db.session.commit()
    return len(recipes)


# ============================================
# RECEIPTS
# ============================================

def _store_receipt(receipt, vendor, amount, method, date, invoice, items):
    receipt.vendor = vendor
    receipt.amount = amount
    receipt.method = method
    receipt.date = date
    receipt.invoice = invoice
    receipt.items = [
        ReceiptItem(position=position, name=item['name'], size=item['size'], price=item['price'])
        for position, item in enumerate(items)
    ]
    try:
        db.session.flush()
    except Exception:
        db.session.rollback()
        raise
    # ingest commits the receipt together with the catalog changes
    summary = ingest(items)
    return receipt, summary


def save_receipt(vendor, amount, method, date, invoice, items):
    """Store a receipt and merge its items into the ingredient catalog."""
    receipt = Receipt()
    db.session.add(receipt)
    return _store_receipt(receipt, vendor, amount, method, date, invoice, items)


def update_receipt(receipt, vendor, amount, method, date, invoice, items):
    """
    Overwrite a stored receipt and merge its new items into the catalog.

    Catalog rows that came from the old items are left in place; a
    rebuild drops them.
    """
    return _store_receipt(receipt, vendor, amount, method, date, invoice, items)
