"""
Unit tests for the reconciliation module.

Collections produced by the organize step are sanitized (falsy values
dropped) and then compared: a collection is discrepant when any value differs
from the first one, ignoring case and surrounding whitespace.
"""

import json
import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from mosaic_functions.core.reconcile import (
    CATEGORIES,
    js_string,
    normalize_value,
    sanitize_organized_data,
    parse_organized_data,
    get_discrepancies,
)


class TestSanitize:
    """Tests for sanitize_organized_data."""

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_drops_falsy_values(self):
        """Empty strings, None, 0, False and empty containers are removed."""
        data = {"price": [1200000, "", None, 0, False, [], {}, "1,200,000"]}
        result = sanitize_organized_data(data)
        assert result["price"] == [1200000, "1,200,000"]

    @pytest.mark.unit
    @pytest.mark.reconcile
    @pytest.mark.smoke
    def test_no_falsy_values_remain(self, organized_consistent):
        """No sanitized collection contains a falsy value."""
        result = sanitize_organized_data(organized_consistent)
        for key, collection in result.items():
            assert all(collection), f"{key} still has falsy values"

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_keeps_order(self):
        """Remaining values keep their source order."""
        result = sanitize_organized_data({"artist": ["B", "", "A", "C"]})
        assert result["artist"] == ["B", "A", "C"]

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_coerces_non_list_values(self):
        """None becomes an empty list, a scalar becomes a one-element list."""
        result = sanitize_organized_data({"title": None, "artist": "Yayoi Kusama"})
        assert result == {"title": [], "artist": ["Yayoi Kusama"]}

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_keeps_all_keys(self, organized_consistent):
        """Every category survives sanitizing, even when emptied."""
        organized_consistent["title"] = ["", None]
        result = sanitize_organized_data(organized_consistent)
        assert set(result.keys()) == set(CATEGORIES)
        assert result["title"] == []


class TestParseOrganizedData:
    """Tests for parse_organized_data."""

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_parses_and_sanitizes(self, organized_consistent):
        result = parse_organized_data(json.dumps(organized_consistent))
        assert result["price"] == [1200000, 1200000]
        assert result["customerAndOwnerName"] == ["Jane Doe", " jane doe"]

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_rejects_non_object(self):
        with pytest.raises(ValueError):
            parse_organized_data("[1, 2, 3]")

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_rejects_invalid_json(self):
        with pytest.raises(ValueError):
            parse_organized_data("not json")


class TestNormalizeValue:
    """Tests for value normalization."""

    @pytest.mark.unit
    @pytest.mark.reconcile
    @pytest.mark.parametrize("value,expected", [
        ("  Jane Doe ", "jane doe"),
        ("PUMPKIN", "pumpkin"),
        (1200000, "1200000"),
        (1200000.0, "1200000"),
        (1.5, "1.5"),
        (True, "true"),
        (None, "null"),
        (["a", "b"], "a,b"),
    ])
    def test_normalize(self, value, expected):
        assert normalize_value(value) == expected

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_dict_matches_js_string(self):
        assert js_string({"a": 1}) == "[object Object]"


class TestGetDiscrepancies:
    """Tests for get_discrepancies."""

    @pytest.mark.unit
    @pytest.mark.reconcile
    @pytest.mark.smoke
    def test_all_equal_collections_not_reported(self, organized_consistent):
        """Case and whitespace differences are not discrepancies."""
        sanitized = sanitize_organized_data(organized_consistent)
        assert get_discrepancies(sanitized) == []

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_distinct_values_reported(self, organized_discrepant):
        """A collection with two distinct normalized values is reported."""
        result = get_discrepancies(organized_discrepant)
        assert result == [{"key": "price", "collection": [1200000, 950000]}]

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_single_value_never_discrepant(self):
        result = get_discrepancies({"title": ["Pumpkin"], "artist": ["anyone"]})
        assert result == []

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_empty_collection_skipped(self):
        assert get_discrepancies({"title": []}) == []

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_number_and_numeric_string_match(self):
        """1200000 and "1200000" compare equal as text."""
        assert get_discrepancies({"price": [1200000, "1200000", " 1200000 "]}) == []

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_first_value_is_reference(self):
        """No majority vote: two matching values against a different first value still flag."""
        result = get_discrepancies({"artist": ["Banksy", "Kusama", "Kusama"]})
        assert len(result) == 1
        assert result[0]["key"] == "artist"
        assert result[0]["collection"] == ["Banksy", "Kusama", "Kusama"]

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_reports_every_discrepant_key_in_order(self):
        data = {
            "artist": ["A", "B"],
            "title": ["T", "t"],
            "price": [1, 2],
            "customerAndOwnerName": ["X", "Y"],
        }
        result = get_discrepancies(data)
        assert [entry["key"] for entry in result] == ["artist", "price", "customerAndOwnerName"]

    @pytest.mark.unit
    @pytest.mark.reconcile
    def test_inner_whitespace_is_significant(self):
        """Only surrounding whitespace is ignored."""
        result = get_discrepancies({"customerAndOwnerName": ["Jane Doe", "Jane  Doe"]})
        assert len(result) == 1
