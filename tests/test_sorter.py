"""Tests for the multi-field sorter."""

import pytest

from swaplist.calculator.sorter import SORT_KEYS, apply_sort, portfolio_percentage, sort_holdings
from swaplist.core.models import SortState
from swaplist.core.types import SortDirection, SortField
from conftest import make_holding


def symbols(tokens):
    return [t.symbol for t in tokens]


class TestSortHoldings:
    """Tests for sort_holdings."""

    def test_every_field_has_a_key(self):
        assert set(SORT_KEYS) == set(SortField)

    def test_sort_by_value_desc(self, sample_holdings):
        result = sort_holdings(sample_holdings, SortField.VALUE, SortDirection.DESC)
        assert symbols(result) == ["SOL", "BONK", "JUP", "USDC"]

    def test_sort_by_balance_asc(self, sample_holdings):
        result = sort_holdings(sample_holdings, SortField.BALANCE, SortDirection.ASC)
        assert symbols(result) == ["SOL", "USDC", "JUP", "BONK"]

    def test_sort_by_symbol_is_case_insensitive(self):
        tokens = [
            make_holding("bonk", 1.0, 1.0),
            make_holding("JUP", 1.0, 1.0),
            make_holding("Aaa", 1.0, 1.0),
        ]
        result = sort_holdings(tokens, SortField.SYMBOL, SortDirection.ASC)
        assert symbols(result) == ["Aaa", "bonk", "JUP"]

    def test_sort_by_percentage_follows_value(self, sample_holdings):
        by_value = sort_holdings(sample_holdings, SortField.VALUE, SortDirection.DESC)
        by_pct = sort_holdings(sample_holdings, SortField.PERCENTAGE, SortDirection.DESC, 3800.0)
        assert symbols(by_pct) == symbols(by_value)

    def test_accepts_string_field_and_direction(self, sample_holdings):
        result = sort_holdings(sample_holdings, "value", "asc")
        assert symbols(result) == ["USDC", "JUP", "BONK", "SOL"]

    def test_returns_new_list(self, sample_holdings):
        original = list(sample_holdings)
        result = sort_holdings(sample_holdings, SortField.VALUE, SortDirection.ASC)
        assert result is not sample_holdings
        assert sample_holdings == original

    def test_idempotent(self, sample_holdings):
        once = sort_holdings(sample_holdings, SortField.BALANCE, SortDirection.DESC)
        twice = sort_holdings(once, SortField.BALANCE, SortDirection.DESC)
        assert once == twice

    def test_desc_then_asc_reverses(self, sample_holdings):
        desc = sort_holdings(sample_holdings, SortField.VALUE, SortDirection.DESC)
        asc = sort_holdings(desc, SortField.VALUE, SortDirection.ASC)
        assert asc == list(reversed(desc))

    def test_stable_for_equal_keys(self):
        """Holdings with equal keys keep their input order in both directions."""
        tokens = [
            make_holding("FIRST", 1.0, 5.0),
            make_holding("BIG", 1.0, 50.0),
            make_holding("SECOND", 5.0, 1.0),
        ]
        desc = sort_holdings(tokens, SortField.VALUE, SortDirection.DESC)
        asc = sort_holdings(tokens, SortField.VALUE, SortDirection.ASC)
        assert symbols(desc) == ["BIG", "FIRST", "SECOND"]
        assert symbols(asc) == ["FIRST", "SECOND", "BIG"]

    def test_unpriced_holdings_sort_as_zero(self):
        tokens = [make_holding("NOPRICE", 10.0), make_holding("PRICED", 1.0, 2.0)]
        result = sort_holdings(tokens, SortField.VALUE, SortDirection.ASC)
        assert symbols(result) == ["NOPRICE", "PRICED"]


class TestPortfolioPercentage:
    """Tests for the percentage column."""

    def test_share_of_total(self):
        assert portfolio_percentage(make_holding("A", 1.0, 25.0), 100.0) == pytest.approx(25.0)

    def test_zero_total(self):
        assert portfolio_percentage(make_holding("A", 1.0, 25.0), 0.0) == 0.0


class TestSortState:
    """Tests for column toggling."""

    def test_default_is_value_desc(self):
        state = SortState()
        assert state.field is SortField.VALUE
        assert state.direction is SortDirection.DESC

    def test_same_field_flips_direction(self):
        state = SortState().toggled(SortField.VALUE)
        assert state.direction is SortDirection.ASC
        assert state.toggled(SortField.VALUE).direction is SortDirection.DESC

    def test_new_field_defaults_to_desc(self):
        state = SortState(field=SortField.VALUE, direction=SortDirection.ASC)
        toggled = state.toggled(SortField.SYMBOL)
        assert toggled.field is SortField.SYMBOL
        assert toggled.direction is SortDirection.DESC

    def test_apply_sort(self, sample_holdings):
        state = SortState(field=SortField.SYMBOL, direction=SortDirection.ASC)
        assert symbols(apply_sort(sample_holdings, state)) == ["BONK", "JUP", "SOL", "USDC"]
