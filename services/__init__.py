"""
Services Package

Business logic modules for costing and nutrition. The database-backed
operations live in services.store and are imported from there directly.
"""

from .errors import (
    CostingError,
    InvalidFormat,
    InvalidInput,
    UnsupportedUnit,
    LookupMiss,
    SkipReason,
    SkippedLine,
)

from .parsing import (
    Quantity,
    ParsedLine,
    parse_fraction,
    parse_ingredient_line,
    parse_size_field,
    parse_receipt_line,
    parse_price,
    receipt_total,
    format_amount,
)

from .conversion import (
    normalize_unit,
    is_volume_unit,
    convert_volume,
    convert_to_grams,
    scale_factor,
)

from .catalog import (
    PriceEntry,
    PriceCatalog,
    normalize_name,
    should_replace,
    unit_equivalents,
    set_unit_equivalents,
    price_per_unit,
    excluded_names,
)

from .cost import (
    CostBreakdown,
    RecipePricing,
    compute_material_cost,
    compute_retail_and_store_price,
    compute_trays_and_remainder,
    compute_trays_made,
    packaging_unit_price,
    price_recipe,
)

from .nutrition import (
    NutritionFacts,
    RecipeNutrition,
    compute_recipe_nutrition,
    compute_per_serving,
    resolve_servings,
    format_label,
)

__all__ = [
    # Errors
    'CostingError',
    'InvalidFormat',
    'InvalidInput',
    'UnsupportedUnit',
    'LookupMiss',
    'SkipReason',
    'SkippedLine',
    # Parsing
    'Quantity',
    'ParsedLine',
    'parse_fraction',
    'parse_ingredient_line',
    'parse_size_field',
    'parse_receipt_line',
    'parse_price',
    'receipt_total',
    'format_amount',
    # Conversion
    'normalize_unit',
    'is_volume_unit',
    'convert_volume',
    'convert_to_grams',
    'scale_factor',
    # Catalog
    'PriceEntry',
    'PriceCatalog',
    'normalize_name',
    'should_replace',
    'unit_equivalents',
    'set_unit_equivalents',
    'price_per_unit',
    'excluded_names',
    # Cost
    'CostBreakdown',
    'RecipePricing',
    'compute_material_cost',
    'compute_retail_and_store_price',
    'compute_trays_and_remainder',
    'compute_trays_made',
    'packaging_unit_price',
    'price_recipe',
    # Nutrition
    'NutritionFacts',
    'RecipeNutrition',
    'compute_recipe_nutrition',
    'compute_per_serving',
    'resolve_servings',
    'format_label',
]
