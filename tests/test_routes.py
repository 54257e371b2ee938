import pytest

from models import db, IngredientPrice


@pytest.fixture
def flour_id(client):
    client.post('/ingredients/ingest', json={'items': [{'name': 'Flour', 'size': '5 lb', 'price': '4.00'}]})
    return IngredientPrice.query.one().id


class TestIngredientRoutes:
    def test_list_empty(self, client):
        response = client.get('/ingredients')
        assert response.status_code == 200
        assert response.get_json() == []

    def test_ingest_and_list(self, client):
        response = client.post('/ingredients/ingest', json={'items': [
            {'name': 'Flour', 'size': '5 lb', 'price': '4.99'},
            {'name': 'Sugar', 'size': '4 lb', 'price': '3.49'},
        ]})
        assert response.status_code == 200
        assert response.get_json()['inserted'] == 2

        names = [row['name'] for row in client.get('/ingredients').get_json()]
        assert names == ['Flour', 'Sugar']

    def test_ingest_requires_list(self, client):
        response = client.post('/ingredients/ingest', json={'items': 'Flour'})
        assert response.status_code == 400
        assert 'error' in response.get_json()

    def test_set_units(self, client, flour_id):
        response = client.post(f'/ingredient/{flour_id}/units', json={'unit': 'cups', 'value': 2})
        assert response.status_code == 200
        data = response.get_json()
        assert data['tablespoons'] == 32
        assert data['teaspoons'] == 96
        assert data['cupsPrice'] == pytest.approx(2.0)

    def test_set_units_rejects_zero(self, client, flour_id):
        response = client.post(f'/ingredient/{flour_id}/units', json={'unit': 'cups', 'value': 0})
        assert response.status_code == 400
        assert 'error' in response.get_json()
        row = db.session.get(IngredientPrice, flour_id)
        assert row.cups is None

    def test_unknown_ingredient(self, client):
        response = client.post('/ingredient/999/units', json={'unit': 'cups', 'value': 2})
        assert response.status_code == 404

    def test_move(self, client, flour_id):
        response = client.post(f'/ingredient/{flour_id}/move', json={'target': 'utensils'})
        assert response.status_code == 200
        assert client.get('/ingredients').get_json() == []
        assert client.get('/utensils').get_json()[0]['name'] == 'Flour'

    def test_move_invalid_target(self, client, flour_id):
        response = client.post(f'/ingredient/{flour_id}/move', json={'target': 'freezer'})
        assert response.status_code == 400

    def test_delete(self, client, flour_id):
        response = client.post(f'/ingredient/{flour_id}/delete')
        assert response.status_code == 200
        assert IngredientPrice.query.count() == 0

    def test_rebuild(self, client):
        client.post('/receipt/add', json={
            'vendor': 'Costco', 'method': 'card', 'date': '2024-03-01',
            'items': 'Flour: 5 lb: 4.99\nFlour: 10 lb: 5.49',
        })
        db.session.query(IngredientPrice).delete()
        db.session.commit()

        response = client.post('/ingredients/rebuild')
        assert response.status_code == 200
        rows = client.get('/ingredients').get_json()
        assert [(row['name'], row['price']) for row in rows] == [('Flour', 5.49)]


class TestNutritionRoutes:
    def test_save_and_list(self, client, flour_id):
        response = client.post('/ingredient-nutrition', json={
            'ingredientName': 'Flour', 'servingSize': 1, 'servingUnit': 'cup', 'calories': 455,
        })
        assert response.status_code == 200
        assert response.get_json()['ingredientName'] == 'flour'

        rows = client.get('/ingredient-nutrition').get_json()
        assert rows[0]['calories'] == 455

    def test_invalid_serving_unit(self, client):
        response = client.post('/ingredient-nutrition', json={'ingredientName': 'Flour', 'servingUnit': 'gallon'})
        assert response.status_code == 400

    def test_numeric_serving_unit_is_rejected(self, client):
        response = client.post('/ingredient-nutrition', json={'ingredientName': 'Flour', 'servingUnit': 5})
        assert response.status_code == 400
        assert 'error' in response.get_json()

    def test_plural_serving_unit(self, client):
        response = client.post('/ingredient-nutrition', json={'ingredientName': 'Flour', 'servingUnit': 'cups'})
        assert response.status_code == 200
        assert response.get_json()['servingUnit'] == 'cup'

    def test_delete(self, client):
        fact_id = client.post('/ingredient-nutrition', json={'ingredientName': 'Salt'}).get_json()['id']
        response = client.post(f'/ingredient-nutrition/{fact_id}/delete')
        assert response.get_json() == {'deleted': 'salt'}


class TestRecipeRoutes:
    @pytest.fixture
    def stocked(self, client, flour_id):
        client.post(f'/ingredient/{flour_id}/units', json={'unit': 'cups', 'value': 20})
        return client.post('/packaging/add', json={'type': 'Cake Box', 'quantity': 10, 'price': 5}).get_json()

    def test_add_recipe(self, client, stocked):
        response = client.post('/recipe/add', json={
            'name': 'Sugar Cookies',
            'items': 'Flour: 2 cups\nSugar: 1 cup',
            'numCookies': 25,
            'cookiesPerTray': 12,
            'selectedPackaging': [stocked['id']],
        })
        assert response.status_code == 201
        data = response.get_json()
        assert data['materialCost'] == pytest.approx(0.4)
        assert data['traysMade'] == pytest.approx(25 / 12)
        assert data['remainingCookies'] == 1
        assert data['retailCost'] == pytest.approx(0.7 * 2.6)
        assert [s['line'] for s in data['skipped']] == ['Sugar: 1 cup']

        listed = client.get('/recipes').get_json()
        assert listed[0]['name'] == 'Sugar Cookies'

    def test_add_rejects_invalid_lines(self, client):
        response = client.post('/recipe/add', json={'name': 'Bread', 'items': ['Flour: 2 cups', 'Eggs: 2']})
        assert response.status_code == 400
        assert response.get_json()['error']['invalidLines'] == ['Eggs: 2']

    def test_add_requires_name(self, client):
        response = client.post('/recipe/add', json={'items': 'Flour: 2 cups'})
        assert response.status_code == 400

    def test_edit_and_delete(self, client, stocked):
        recipe_id = client.post('/recipe/add', json={'name': 'Bread', 'items': 'Flour: 2 cups'}).get_json()['id']

        response = client.post(f'/recipe/{recipe_id}/edit', json={'name': 'Bread', 'items': 'Flour: 5 cups'})
        assert response.status_code == 200
        assert response.get_json()['materialCost'] == pytest.approx(1.0)
        assert client.get(f'/recipe/{recipe_id}').get_json()['items'] == [{'name': 'Flour', 'size': '5 cups'}]

        assert client.post(f'/recipe/{recipe_id}/delete').status_code == 200
        assert client.get(f'/recipe/{recipe_id}').status_code == 404

    def test_preview_cost(self, client, stocked):
        response = client.post('/recipe/preview-cost', json={
            'items': ['Flour: 1 cup', 'Butter: 1 cup'],
            'numCookies': 10,
            'cookiesPerTray': 0,
        })
        data = response.get_json()
        assert data['materialCost'] == pytest.approx(0.2)
        assert data['traysMade'] is None
        assert data['wholeTrays'] is None
        assert data['storePrice'] == pytest.approx(0.2 * 1.5 * 1.3)
        assert data['skipped'][0]['reason'] == 'lookup_miss'

    def test_nutrition(self, client, stocked):
        client.post('/ingredient-nutrition', json={
            'ingredientName': 'flour', 'servingSize': 1, 'servingUnit': 'cup', 'calories': 455, 'protein': 12.9,
        })
        recipe_id = client.post('/recipe/add', json={
            'name': 'Bread', 'items': 'Flour: 1 1/2 cups\nYeast: 1 teaspoon', 'numCookies': 4,
        }).get_json()['id']

        data = client.get(f'/recipe/{recipe_id}/nutrition?servings=2').get_json()
        assert data['servings'] == 2
        assert data['total']['calories'] == pytest.approx(682.5)
        assert data['label']['total']['calories'] == 683
        assert data['label']['perServing']['protein'] == pytest.approx(9.7)
        assert [s['reason'] for s in data['skipped']] == ['lookup_miss']

    def test_nutrition_unknown_recipe(self, client):
        assert client.get('/recipe/999/nutrition').status_code == 404


class TestSupplyRoutes:
    def test_packaging(self, client):
        response = client.post('/packaging/add', json={'type': 'Cake Box', 'quantity': 4, 'price': 2})
        assert response.status_code == 201
        assert response.get_json()['pricePer'] == 0.5
        packaging_id = response.get_json()['id']
        assert client.post(f'/packaging/{packaging_id}/delete').get_json() == {'deleted': 'Cake Box'}
        assert client.get('/packaging').get_json() == []

    def test_packaging_requires_type(self, client):
        assert client.post('/packaging/add', json={'quantity': 4}).status_code == 400

    def test_utensils(self, client):
        response = client.post('/utensils/add', json={'name': 'Whisk', 'quantity': 2, 'condition': 'good'})
        assert response.status_code == 201
        utensil_id = response.get_json()['id']
        assert client.get('/utensils').get_json()[0]['condition'] == 'good'
        assert client.post(f'/utensils/{utensil_id}/delete').status_code == 200


class TestReceiptRoutes:
    def test_add_computes_amount_and_ingests(self, client):
        response = client.post('/receipt/add', json={
            'vendor': 'Costco', 'method': 'card', 'date': '2024-03-01',
            'items': 'Flour: 5 lb: 4.99\nSugar: 4 lb: 3.01',
        })
        assert response.status_code == 201
        data = response.get_json()
        assert data['amount'] == 8.0
        assert data['ingredients']['inserted'] == 2
        assert len(data['items']) == 2

        assert len(client.get('/receipts').get_json()) == 1
        assert len(client.get('/ingredients').get_json()) == 2

    def test_add_requires_vendor(self, client):
        response = client.post('/receipt/add', json={'method': 'card', 'date': '2024-03-01'})
        assert response.status_code == 400

    def test_edit(self, client):
        receipt_id = client.post('/receipt/add', json={
            'vendor': 'Costco', 'method': 'card', 'date': '2024-03-01', 'items': 'Flour: 5 lb: 4.99',
        }).get_json()['id']

        response = client.post(f'/receipt/{receipt_id}/edit', json={
            'vendor': 'Costco', 'method': 'card', 'date': '2024-03-02', 'invoice': 'C-9',
            'items': 'Flour: 10 lb: 6.49 ea\nSugar: 4 lb: 2.99',
        })
        assert response.status_code == 200
        data = response.get_json()
        assert data['amount'] == 9.48
        assert data['invoice'] == 'C-9'
        assert data['ingredients']['replaced'] == 1
        assert [item['name'] for item in data['items']] == ['Flour', 'Sugar']

        assert client.get(f'/receipt/{receipt_id}').get_json()['date'] == '2024-03-02'
        assert len(client.get('/receipts').get_json()) == 1
        prices = {row['name']: row['price'] for row in client.get('/ingredients').get_json()}
        assert prices == {'Flour': 6.49, 'Sugar': 2.99}

    def test_edit_unknown_receipt(self, client):
        response = client.post('/receipt/999/edit', json={'vendor': 'Costco', 'method': 'card', 'date': '2024-03-01'})
        assert response.status_code == 404

    def test_edit_requires_fields(self, client):
        receipt_id = client.post('/receipt/add', json={
            'vendor': 'Costco', 'method': 'card', 'date': '2024-03-01', 'items': 'Flour: 5 lb: 4.99',
        }).get_json()['id']
        response = client.post(f'/receipt/{receipt_id}/edit', json={'vendor': '', 'method': 'card', 'date': '2024-03-01'})
        assert response.status_code == 400
        assert client.get(f'/receipt/{receipt_id}').get_json()['vendor'] == 'Costco'

    def test_delete_keeps_catalog(self, client):
        receipt_id = client.post('/receipt/add', json={
            'vendor': 'Costco', 'method': 'card', 'date': '2024-03-01', 'items': 'Flour: 5 lb: 4.99',
        }).get_json()['id']
        assert client.post(f'/receipt/{receipt_id}/delete').status_code == 200
        assert client.get('/receipts').get_json() == []
        assert len(client.get('/ingredients').get_json()) == 1


class TestCommands:
    def test_init_db(self, app):
        result = app.test_cli_runner().invoke(args=['init-db'])
        assert result.exit_code == 0

    def test_rebuild_catalog(self, app, client):
        client.post('/receipt/add', json={
            'vendor': 'Costco', 'method': 'card', 'date': '2024-03-01', 'items': 'Flour: 5 lb: 4.99',
        })
        db.session.query(IngredientPrice).delete()
        db.session.commit()

        result = app.test_cli_runner().invoke(args=['rebuild-catalog'])
        assert result.exit_code == 0
        assert IngredientPrice.query.count() == 1
