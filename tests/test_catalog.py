from types import SimpleNamespace

import pytest

from services import (
    InvalidInput,
    PriceCatalog,
    PriceEntry,
    excluded_names,
    normalize_name,
    price_per_unit,
    set_unit_equivalents,
    should_replace,
    unit_equivalents,
)


def test_normalize_name():
    assert normalize_name('  Brown Sugar ') == 'brown sugar'
    assert normalize_name(None) == ''


class TestShouldReplace:
    def test_new_name(self):
        assert should_replace([], 4.99)

    def test_higher_price_wins(self):
        assert should_replace([4.99], 5.49)

    def test_equal_price_is_discarded(self):
        assert not should_replace([5.49], 5.49)

    def test_lower_price_is_discarded(self):
        assert not should_replace([5.49, 3.00], 4.99)

    def test_missing_prices_ignored(self):
        assert should_replace([None], 1.0)


class TestUnitEquivalents:
    def test_from_cups(self):
        assert unit_equivalents('cups', 2) == {'cups': 2, 'tablespoons': 32, 'teaspoons': 96}

    def test_from_tablespoons(self):
        result = unit_equivalents('tablespoons', 8)
        assert result['cups'] == pytest.approx(0.5)
        assert result['teaspoons'] == 24

    def test_from_teaspoons(self):
        result = unit_equivalents('teaspoons', '48')
        assert result['cups'] == pytest.approx(1)
        assert result['tablespoons'] == pytest.approx(16)

    @pytest.mark.parametrize('value', [0, -1, 'abc', None, float('inf')])
    def test_rejects_non_positive_or_non_numeric(self, value):
        with pytest.raises(InvalidInput):
            unit_equivalents('cups', value)

    def test_rejects_unknown_field(self):
        with pytest.raises(InvalidInput):
            unit_equivalents('gallons', 1)

    def test_set_leaves_entry_unchanged_on_error(self):
        entry = PriceEntry(name='Flour', price=4.0)
        with pytest.raises(InvalidInput):
            set_unit_equivalents(entry, 'cups', 0)
        assert entry.cups is None
        assert entry.tablespoons is None
        assert entry.teaspoons is None

    def test_set_updates_all_three(self):
        entry = PriceEntry(name='Flour', price=4.0)
        set_unit_equivalents(entry, 'tablespoons', 32)
        assert (entry.cups, entry.tablespoons, entry.teaspoons) == (2, 32, 96)


class TestPricePerUnit:
    def test_derived_from_equivalents(self):
        entry = PriceEntry(name='Flour', price=4.8, cups=2)
        assert price_per_unit(entry, 'cup') == pytest.approx(2.4)
        assert price_per_unit(entry, 'cups') == pytest.approx(2.4)

    def test_unknown_without_equivalents(self):
        entry = PriceEntry(name='Flour', price=4.8)
        assert price_per_unit(entry, 'cup') is None
        assert price_per_unit(entry, 'teaspoon') is None

    def test_zero_equivalent_is_unknown(self):
        entry = PriceEntry(name='Flour', price=4.8, cups=0)
        assert price_per_unit(entry, 'cup') is None

    def test_non_volume_unit(self):
        entry = PriceEntry(name='Flour', price=4.8, cups=2)
        assert price_per_unit(entry, 'gram') is None

    def test_to_dict_includes_derived_prices(self):
        entry = PriceEntry(name='Flour', size='5 lb', price=4.8, cups=2, tablespoons=32, teaspoons=96)
        data = entry.to_dict()
        assert data['cupsPrice'] == pytest.approx(2.4)
        assert data['tablespoonsPrice'] == pytest.approx(0.15)
        assert data['teaspoonsPrice'] == pytest.approx(0.05)


class TestPriceCatalog:
    def test_keeps_highest_price(self):
        catalog = PriceCatalog()
        assert catalog.add(PriceEntry(name='Flour', price=4.99))
        assert catalog.add(PriceEntry(name='flour', price=5.49))
        assert not catalog.add(PriceEntry(name='  FLOUR ', price=3.00))
        assert len(catalog) == 1
        assert catalog.lookup('Flour ').price == 5.49

    def test_rejects_unusable_entries(self):
        catalog = PriceCatalog()
        assert not catalog.add(PriceEntry(name='Flour', price='abc'))
        assert not catalog.add(PriceEntry(name='  ', price=1.0))
        assert len(catalog) == 0

    def test_price_strings_are_parsed(self):
        catalog = PriceCatalog([PriceEntry(name='Sugar', price='$3.50')])
        assert catalog.lookup('sugar').price == 3.5

    def test_iterates_sorted_by_name(self):
        catalog = PriceCatalog([
            PriceEntry(name='Sugar', price=3.0),
            PriceEntry(name='butter', price=4.0),
            PriceEntry(name='Flour', price=5.0),
        ])
        assert [entry.key for entry in catalog] == ['butter', 'flour', 'sugar']
        assert 'BUTTER' in catalog
        assert 'eggs' not in catalog

    def test_exclude(self):
        catalog = PriceCatalog([PriceEntry(name='Flour', price=5.0), PriceEntry(name='Cake Box', price=9.0)])
        filtered = catalog.exclude({'cake box'})
        assert 'cake box' not in filtered
        assert 'flour' in filtered
        assert 'cake box' in catalog

    def test_from_rows_skips_excluded(self):
        rows = [
            SimpleNamespace(name='Flour', to_entry=lambda: PriceEntry(name='Flour', price=5.0)),
            SimpleNamespace(name='Whisk', to_entry=lambda: PriceEntry(name='Whisk', price=12.0)),
        ]
        catalog = PriceCatalog.from_rows(rows, exclude={'whisk'})
        assert len(catalog) == 1
        assert 'flour' in catalog


def test_excluded_names():
    packaging = [SimpleNamespace(type='Cake Box'), SimpleNamespace(type='')]
    utensils = [SimpleNamespace(name=' Whisk ')]
    assert excluded_names(packaging, utensils) == {'cake box', 'whisk'}
