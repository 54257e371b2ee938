from flask import Flask, request, jsonify
from flask_migrate import Migrate
import logging
import math

from config import get_config
from constants import MAX_LENGTHS, VALID_MOVE_TARGETS
from models import (
    db,
    IngredientPrice,
    NutritionFact,
    Recipe,
    Packaging,
    Utensil,
    Receipt,
)
from services import (
    CostingError,
    LookupMiss,
    compute_material_cost,
    compute_retail_and_store_price,
    compute_trays_and_remainder,
    compute_trays_made,
    format_label,
    parse_receipt_line,
    receipt_total,
    set_unit_equivalents,
)
from services import store
from services.nutrition import to_document
from utils import sanitize_text, sanitize_name, setup_logging

logger = logging.getLogger('app')

app = Flask(__name__)
app.config.from_object(get_config())

setup_logging(app.config['LOG_LEVEL'], app.config['LOG_FILE'])

db.init_app(app)
migrate = Migrate(app, db)


def safe_float(value, default=0.0, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    try:
        result = float(value) if value not in (None, '') else default
        if result is not None and not math.isfinite(result):
            return default
        if min_val is not None and result is not None:
            result = max(min_val, result)
        if max_val is not None and result is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def safe_int(value, default=None, min_val=None, max_val=None):
    """Safely parse an integer value with optional bounds."""
    try:
        result = int(float(value)) if value not in (None, '') else default
        if min_val is not None and result is not None:
            result = max(min_val, result)
        if max_val is not None and result is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError, OverflowError):
        return default


def request_data():
    """JSON body if present, otherwise form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def split_lines(value):
    """Accept a newline-separated string or a list of lines."""
    if isinstance(value, list):
        return [str(line).strip() for line in value if str(line).strip()]
    return [line.strip() for line in (value or '').split('\n') if line.strip()]


def error(message, status=400):
    return jsonify({'error': message}), status


@app.errorhandler(CostingError)
def handle_costing_error(e):
    if isinstance(e, LookupMiss):
        return error(str(e), 404)
    return error(str(e), 400)


# ============================================
# INGREDIENTS
# ============================================

@app.route('/ingredients')
def ingredients_list():
    return jsonify([entry.to_dict() for entry in store.ingredient_rows()])


@app.route('/ingredients/ingest', methods=['POST'])
def ingredients_ingest():
    data = request_data()
    items = data.get('items')
    if not isinstance(items, list):
        return error('items must be a list of {name, size, price}')

    cleaned = [
        {
            'name': sanitize_name(item.get('name'), max_length=MAX_LENGTHS['ingredient_name']),
            'size': sanitize_name(item.get('size'), max_length=MAX_LENGTHS['ingredient_size']),
            'price': item.get('price'),
        }
        for item in items if isinstance(item, dict)
    ]
    summary = store.ingest(cleaned)
    return jsonify(summary.to_dict())


@app.route('/ingredients/rebuild', methods=['POST'])
def ingredients_rebuild():
    summary = store.rebuild_catalog_from_receipts()
    return jsonify(summary.to_dict())


@app.route('/ingredient/<int:id>/units', methods=['POST'])
def ingredient_units(id):
    ingredient = db.get_or_404(IngredientPrice, id)
    data = request_data()

    set_unit_equivalents(ingredient, data.get('unit'), data.get('value'))
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception("Failed to update units for ingredient %s", id)
        return error('Failed to save')
    return jsonify(ingredient.to_dict())


@app.route('/ingredient/<int:id>/move', methods=['POST'])
def ingredient_move(id):
    ingredient = db.get_or_404(IngredientPrice, id)
    target = (request_data().get('target') or '').lower()
    if target not in VALID_MOVE_TARGETS:
        return error(f'Invalid target: {target}')
    name = ingredient.name
    store.move_ingredient(ingredient, target)
    return jsonify({'moved': name, 'target': target})


@app.route('/ingredient/<int:id>/delete', methods=['POST'])
def ingredient_delete(id):
    ingredient = db.get_or_404(IngredientPrice, id)
    name = ingredient.name
    # Nutrition facts are left in place; they are keyed by name, not id
    db.session.delete(ingredient)
    db.session.commit()
    return jsonify({'deleted': name})


# ============================================
# INGREDIENT NUTRITION
# ============================================

@app.route('/ingredient-nutrition')
def nutrition_list():
    return jsonify(store.nutrition_rows())


@app.route('/ingredient-nutrition', methods=['POST'])
def nutrition_save():
    data = request_data()
    name = sanitize_name(data.get('ingredientName'), max_length=MAX_LENGTHS['ingredient_name'])
    fact = store.upsert_nutrition_fact(name, data)
    return jsonify(fact.to_dict())


@app.route('/ingredient-nutrition/<int:id>/delete', methods=['POST'])
def nutrition_delete(id):
    fact = db.get_or_404(NutritionFact, id)
    name = fact.ingredient_name
    db.session.delete(fact)
    db.session.commit()
    return jsonify({'deleted': name})


# ============================================
# RECIPES
# ============================================

def recipe_form(data):
    """Validate recipe fields. Returns (fields, error message)."""
    name = sanitize_name(data.get('name'), max_length=MAX_LENGTHS['recipe_name'])
    if not name:
        return None, 'Please enter a recipe name.'

    lines = split_lines(data.get('items'))
    if not lines:
        return None, 'Please enter at least one ingredient line like "Flour: 2 cups".'

    items, invalid = store.parse_recipe_lines(
        [sanitize_name(line, max_length=MAX_LENGTHS['recipe_item']) for line in lines]
    )
    if invalid:
        return None, {
            'message': 'Each line must look like: Flour: 2 cups',
            'invalidLines': invalid,
        }

    packaging_ids = data.get('selectedPackaging') or []
    if not isinstance(packaging_ids, list):
        packaging_ids = [packaging_ids]
    packaging_ids = [safe_int(pid) for pid in packaging_ids]
    if any(pid is None for pid in packaging_ids):
        return None, 'Invalid packaging selection'

    return {
        'name': name,
        'description': sanitize_text(data.get('description'), max_length=MAX_LENGTHS['description']),
        'items': items,
        'num_cookies': safe_int(data.get('numCookies'), min_val=0),
        'cookies_per_tray': safe_int(data.get('cookiesPerTray'), min_val=0),
        'selected_packaging': packaging_ids,
    }, None


def costing_response(recipe, costing):
    body = recipe.to_dict()
    body['skipped'] = [s.to_dict() for s in costing.material.skipped]
    return body


@app.route('/recipes')
def recipes_list():
    recipes = Recipe.query.order_by(Recipe.name).all()
    return jsonify([recipe.to_dict() for recipe in recipes])


@app.route('/recipe/<int:id>')
def recipe_view(id):
    recipe = db.get_or_404(Recipe, id)
    return jsonify(recipe.to_dict())


@app.route('/recipe/add', methods=['POST'])
def recipe_add():
    fields, problem = recipe_form(request_data())
    if problem:
        return jsonify({'error': problem}), 400

    recipe, costing = store.save_recipe(None, **fields)
    return jsonify(costing_response(recipe, costing)), 201


@app.route('/recipe/<int:id>/edit', methods=['POST'])
def recipe_edit(id):
    recipe = db.get_or_404(Recipe, id)
    fields, problem = recipe_form(request_data())
    if problem:
        return jsonify({'error': problem}), 400

    try:
        recipe, costing = store.save_recipe(recipe, **fields)
    except Exception:
        logger.exception("Failed to save recipe %s", id)
        return error('Failed to save')
    return jsonify(costing_response(recipe, costing))


@app.route('/recipe/<int:id>/delete', methods=['POST'])
def recipe_delete(id):
    recipe = db.get_or_404(Recipe, id)
    name = recipe.name
    db.session.delete(recipe)
    db.session.commit()
    return jsonify({'deleted': name})


@app.route('/recipe/preview-cost', methods=['POST'])
def recipe_preview_cost():
    """Live cost while a recipe is being edited, without saving it."""
    data = request_data()
    catalog = store.load_price_catalog()
    breakdown = compute_material_cost(split_lines(data.get('items')), catalog)

    num_cookies, cookies_per_tray = data.get('numCookies'), data.get('cookiesPerTray')
    trays, remaining = compute_trays_and_remainder(num_cookies, cookies_per_tray)
    packaging = store.resolve_packaging(
        [pid for pid in (safe_int(p) for p in data.get('selectedPackaging') or []) if pid is not None]
    )
    pricing = compute_retail_and_store_price(breakdown.total, trays, [p.unit_price for p in packaging])

    return jsonify({
        'materialCost': round(breakdown.total, 2),
        'retailCost': round(pricing.retail, 2),
        'storePrice': round(pricing.store, 2),
        'traysMade': compute_trays_made(num_cookies, cookies_per_tray),
        'wholeTrays': trays,
        'remainingCookies': remaining,
        'lines': [
            {'line': line.line, 'unitPrice': line.unit_price, 'cost': line.cost}
            for line in breakdown.lines
        ],
        'skipped': [s.to_dict() for s in breakdown.skipped],
    })


@app.route('/recipe/<int:id>/nutrition')
def recipe_nutrition(id):
    servings = safe_float(request.args.get('servings'), default=None)
    recipe, result, count, per_serving = store.recipe_nutrition(id, servings)
    return jsonify({
        'recipe': recipe.name,
        'servings': count,
        'total': to_document(result.total),
        'perServing': to_document(per_serving),
        'label': {
            'total': to_document(format_label(result.total)),
            'perServing': to_document(format_label(per_serving)),
        },
        'skipped': [s.to_dict() for s in result.skipped],
    })


# ============================================
# PACKAGING & UTENSILS
# ============================================

@app.route('/packaging')
def packaging_list():
    return jsonify([p.to_dict() for p in Packaging.query.order_by(Packaging.type).all()])


@app.route('/packaging/add', methods=['POST'])
def packaging_add():
    data = request_data()
    type_ = sanitize_name(data.get('type'), max_length=MAX_LENGTHS['packaging_type'])
    if not type_:
        return error('Packaging type is required')

    packaging = Packaging(
        type=type_,
        quantity=safe_float(data.get('quantity'), default=0.0, min_val=0.0),
        price=safe_float(data.get('price'), default=0.0, min_val=0.0),
    )
    db.session.add(packaging)
    db.session.commit()
    return jsonify(packaging.to_dict()), 201


@app.route('/packaging/<int:id>/delete', methods=['POST'])
def packaging_delete(id):
    packaging = db.get_or_404(Packaging, id)
    name = packaging.type
    db.session.delete(packaging)
    db.session.commit()
    return jsonify({'deleted': name})


@app.route('/utensils')
def utensils_list():
    return jsonify([u.to_dict() for u in Utensil.query.order_by(Utensil.name).all()])


@app.route('/utensils/add', methods=['POST'])
def utensils_add():
    data = request_data()
    name = sanitize_name(data.get('name'), max_length=MAX_LENGTHS['utensil_name'])
    if not name:
        return error('Utensil name is required')

    utensil = Utensil(
        name=name,
        quantity=safe_float(data.get('quantity'), default=None, min_val=0.0),
        condition=sanitize_text(data.get('condition'), max_length=50),
    )
    db.session.add(utensil)
    db.session.commit()
    return jsonify(utensil.to_dict()), 201


@app.route('/utensils/<int:id>/delete', methods=['POST'])
def utensils_delete(id):
    utensil = db.get_or_404(Utensil, id)
    name = utensil.name
    db.session.delete(utensil)
    db.session.commit()
    return jsonify({'deleted': name})


# ============================================
# RECEIPTS
# ============================================

def receipt_form(data):
    """Validate receipt fields. Returns (fields, error message)."""
    vendor = sanitize_name(data.get('vendor'), max_length=MAX_LENGTHS['vendor'])
    method = sanitize_name(data.get('method'), max_length=50)
    date = sanitize_name(data.get('date'), max_length=20)
    lines = split_lines(data.get('items'))

    amount = safe_float(data.get('amount'), default=None)
    if amount is None:
        amount = receipt_total(lines)

    if not vendor or not method or not date:
        return None, 'Please fill in all required fields.'

    items = []
    for line in lines:
        item = parse_receipt_line(line)
        items.append({
            'name': sanitize_name(item['name'], max_length=MAX_LENGTHS['ingredient_name']),
            'size': sanitize_name(item['size'], max_length=MAX_LENGTHS['ingredient_size']),
            'price': sanitize_name(item['price'], max_length=20),
        })

    return {
        'vendor': vendor,
        'amount': amount,
        'method': method,
        'date': date,
        'invoice': sanitize_name(data.get('invoice'), max_length=MAX_LENGTHS['invoice']),
        'items': items,
    }, None


def receipt_response(receipt, summary):
    body = receipt.to_dict()
    body['ingredients'] = summary.to_dict()
    return body


@app.route('/receipts')
def receipts_list():
    return jsonify([r.to_dict() for r in Receipt.query.order_by(Receipt.date.desc()).all()])


@app.route('/receipt/<int:id>')
def receipt_view(id):
    receipt = db.get_or_404(Receipt, id)
    return jsonify(receipt.to_dict())


@app.route('/receipt/add', methods=['POST'])
def receipt_add():
    fields, problem = receipt_form(request_data())
    if problem:
        return error(problem)

    receipt, summary = store.save_receipt(**fields)
    return jsonify(receipt_response(receipt, summary)), 201


@app.route('/receipt/<int:id>/edit', methods=['POST'])
def receipt_edit(id):
    receipt = db.get_or_404(Receipt, id)
    fields, problem = receipt_form(request_data())
    if problem:
        return error(problem)

    receipt, summary = store.update_receipt(receipt, **fields)
    return jsonify(receipt_response(receipt, summary))


@app.route('/receipt/<int:id>/delete', methods=['POST'])
def receipt_delete(id):
    receipt = db.get_or_404(Receipt, id)
    db.session.delete(receipt)
    db.session.commit()
    return jsonify({'deleted': id})


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db():
    with app.app_context():
        db.create_all()


@app.cli.command('init-db')
def init_db_command():
    """Create all tables."""
    init_db()
    logger.info("Database initialized")


@app.cli.command('rebuild-catalog')
def rebuild_catalog_command():
    """Rebuild the ingredient catalog from all receipts and refresh recipe costs."""
    summary = store.rebuild_catalog_from_receipts()
    count = store.recompute_all_recipes()
    logger.info("Catalog rebuilt: %s; %d recipes recomputed", summary.to_dict(), count)


if __name__ == '__main__':
    init_db()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
