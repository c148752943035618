"""
Tests for the tabular ingestor.
"""

import pytest

from datamind.modules.data.parser import coerce_value, parse_csv
from datamind.modules.data.sampler import sample_rows


class TestCoerceValue:
    """Type inference for a single field."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("", None),
            ("42", 42),
            ("-7", -7),
            ("3.5", 3.5),
            ("1e3", 1000.0),
            (".5", 0.5),
            ("North", "North"),
            ("12abc", "12abc"),
        ],
    )
    def test_coercion(self, raw, expected):
        value = coerce_value(raw)
        assert value == expected
        assert type(value) is type(expected)

    @pytest.mark.parametrize("raw", ["0x1A", "Infinity", "nan", "1,000", "\u0664\u0662", "\uff11\uff12"])
    def test_non_decimal_literals_stay_text(self, raw):
        assert coerce_value(raw) == raw


class TestParseCsv:
    """Row construction and validity rules."""

    def test_basic_parse(self):
        dataset = parse_csv("Month,Revenue,Region\nJan,100,North\nFeb,150.5,South")

        assert dataset.columns == ("Month", "Revenue", "Region")
        assert dataset.rows == (
            {"Month": "Jan", "Revenue": 100, "Region": "North"},
            {"Month": "Feb", "Revenue": 150.5, "Region": "South"},
        )

    def test_every_row_has_all_header_keys(self):
        dataset = parse_csv("a,b,c\n1,,x\n,2,\n")

        for row in dataset.rows:
            assert tuple(row.keys()) == dataset.columns
        assert dataset.rows[0] == {"a": 1, "b": None, "c": "x"}

    def test_partially_empty_row_kept(self):
        dataset = parse_csv("Month,Revenue\nJan,100\nFeb,\n")

        assert dataset.rows == (
            {"Month": "Jan", "Revenue": 100},
            {"Month": "Feb", "Revenue": None},
        )

    def test_scientific_notation(self):
        dataset = parse_csv("x\n4.5e1")

        assert dataset.rows[0]["x"] == 45

    def test_header_only_is_empty(self):
        assert parse_csv("a,b,c").is_empty
        assert parse_csv("a,b,c\n").is_empty

    def test_blank_input_is_empty(self):
        assert parse_csv("").is_empty
        assert parse_csv("   \n  ").is_empty

    def test_field_count_mismatch_dropped(self):
        dataset = parse_csv("a,b\n1,2\n1,2,3\n4\n5,6")

        assert dataset.row_count == 2
        assert [row["a"] for row in dataset.rows] == [1, 5]

    def test_all_null_row_dropped(self):
        dataset = parse_csv("a,b\n,\n1,2\n , ")

        assert dataset.row_count == 1
        assert dataset.rows[0] == {"a": 1, "b": 2}

    def test_only_invalid_rows_is_empty(self):
        assert parse_csv("a,b\n,\n1,2,3").is_empty

    def test_padding_inside_quotes_still_numeric(self):
        dataset = parse_csv('label,value\nA," 42 "\nB," 2.5"\nC," x "')

        assert [row["value"] for row in dataset.rows] == [42, 2.5, " x "]

    def test_surrounding_quotes_stripped(self):
        dataset = parse_csv('"name","score"\n"Ana","9"\n "Luis" , "7.5" ')

        assert dataset.columns == ("name", "score")
        assert dataset.rows[0] == {"name": "Ana", "score": 9}
        assert dataset.rows[1] == {"name": "Luis", "score": 7.5}

    def test_quoted_comma_splits_field(self):
        dataset = parse_csv('city,pop\n"Austin, TX",900\nDallas,1300')

        # The quoted comma produces three fields, so that line is dropped
        assert dataset.row_count == 1
        assert dataset.rows[0]["city"] == "Dallas"

    def test_duplicate_headers_last_value_wins(self, caplog):
        dataset = parse_csv("a,b,a\n1,2,3")

        assert dataset.columns == ("a", "b")
        assert dataset.rows[0] == {"a": 3, "b": 2}
        assert "Duplicate column names" in caplog.text

    def test_preserves_order(self):
        lines = "\n".join(f"r{i},{i}" for i in range(50))
        dataset = parse_csv(f"label,value\n{lines}")

        assert [row["value"] for row in dataset.rows] == list(range(50))

    def test_deterministic(self):
        text = "x,y\n1,a\n2,b"
        assert parse_csv(text) == parse_csv(text)

    def test_reparse_of_sample_is_stable(self):
        text = "Month,Revenue,Score\nJan,100,7.5\nFeb,,8\nMar,120,"
        dataset = parse_csv(text)

        assert parse_csv(sample_rows(dataset, dataset.row_count)) == dataset
