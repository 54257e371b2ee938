"""Initial bakery schema

Revision ID: 3b7e1d20a9c4
Revises:
Create Date: 2026-10-19 10:12:41.118204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7e1d20a9c4'
down_revision = None
branch_labels = None
depends_on = None

NUTRIENT_COLUMNS = (
    'calories', 'total_fat', 'saturated_fat', 'trans_fat', 'cholesterol',
    'sodium', 'total_carbs', 'dietary_fiber', 'total_sugars', 'added_sugars',
    'protein', 'vitamin_d', 'calcium', 'iron', 'potassium',
)


def upgrade():
    op.create_table(
        'ingredient_price',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('size', sa.String(length=100), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('cups', sa.Float(), nullable=True),
        sa.Column('tablespoons', sa.Float(), nullable=True),
        sa.Column('teaspoons', sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('ingredient_price', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_ingredient_price_name'), ['name'], unique=False)

    op.create_table(
        'nutrition_fact',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ingredient_name', sa.String(length=200), nullable=False),
        sa.Column('serving_size', sa.Float(), nullable=True),
        sa.Column('serving_unit', sa.String(length=20), nullable=True),
        *[sa.Column(name, sa.Float(), nullable=True) for name in NUTRIENT_COLUMNS],
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('nutrition_fact', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_nutrition_fact_ingredient_name'), ['ingredient_name'], unique=True)

    op.create_table(
        'recipe',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('num_cookies', sa.Integer(), nullable=True),
        sa.Column('cookies_per_tray', sa.Integer(), nullable=True),
        sa.Column('material_cost', sa.Float(), nullable=True),
        sa.Column('retail_cost', sa.Float(), nullable=True),
        sa.Column('store_price', sa.Float(), nullable=True),
        sa.Column('trays_made', sa.Float(), nullable=True),
        sa.Column('remaining_cookies', sa.Integer(), nullable=True),
        sa.Column('selected_packaging', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('recipe', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_name'), ['name'], unique=False)

    op.create_table(
        'recipe_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('size', sa.String(length=100), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipe.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('recipe_item', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_item_recipe_id'), ['recipe_id'], unique=False)

    op.create_table(
        'packaging',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=100), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'utensil',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=True),
        sa.Column('condition', sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'receipt',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('vendor', sa.String(length=200), nullable=False),
        sa.Column('amount', sa.Float(), nullable=True),
        sa.Column('method', sa.String(length=50), nullable=True),
        sa.Column('date', sa.String(length=20), nullable=True),
        sa.Column('invoice', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'receipt_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('receipt_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('size', sa.String(length=100), nullable=True),
        sa.Column('price', sa.String(length=20), nullable=True),
        sa.ForeignKeyConstraint(['receipt_id'], ['receipt.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('receipt_item', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_receipt_item_receipt_id'), ['receipt_id'], unique=False)


def downgrade():
    with op.batch_alter_table('receipt_item', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_receipt_item_receipt_id'))
    op.drop_table('receipt_item')
    op.drop_table('receipt')
    op.drop_table('utensil')
    op.drop_table('packaging')
    with op.batch_alter_table('recipe_item', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_recipe_item_recipe_id'))
    op.drop_table('recipe_item')
    with op.batch_alter_table('recipe', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_recipe_name'))
    op.drop_table('recipe')
    with op.batch_alter_table('nutrition_fact', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_nutrition_fact_ingredient_name'))
    op.drop_table('nutrition_fact')
    with op.batch_alter_table('ingredient_price', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_ingredient_price_name'))
    op.drop_table('ingredient_price')
