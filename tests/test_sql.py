"""
Tests for the SQL fragment builders.
"""

import pytest

from jobly.core.exceptions import BadRequestError
from jobly.core.sql import bind_positional, sql_for_job_filters, sql_for_partial_update


class TestPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_maps_fields_to_columns(self):
        set_cols, values = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"},
        )

        assert set_cols == '"first_name"=$1, "age"=$2'
        assert values == ["Aliya", 32]

    def test_placeholders_sequential_from_one(self):
        """One placeholder per field, numbered in input order"""
        data = {"a": 1, "b": None, "c": "x", "d": 4.5}
        set_cols, values = sql_for_partial_update(data, {})

        assert set_cols == '"a"=$1, "b"=$2, "c"=$3, "d"=$4'
        assert values == [1, None, "x", 4.5]

    def test_single_field(self):
        set_cols, values = sql_for_partial_update({"title": "Dev"}, {"title": "title"})

        assert set_cols == '"title"=$1'
        assert values == ["Dev"]

    def test_empty_data_is_bad_request(self):
        with pytest.raises(BadRequestError):
            sql_for_partial_update({}, {"title": "title"})


class TestJobFilters:
    """Tests for sql_for_job_filters"""

    def test_no_filters(self):
        assert sql_for_job_filters() == ("", [])

    def test_title_is_lowercased_substring(self):
        where, values = sql_for_job_filters(title="Engineer")

        assert where == "WHERE LOWER(title) LIKE $1"
        assert values == ["%engineer%"]

    def test_min_salary_zero_still_filters(self):
        where, values = sql_for_job_filters(min_salary=0)

        assert where == "WHERE salary >= $1"
        assert values == [0]

    def test_has_equity_adds_no_parameter(self):
        where, values = sql_for_job_filters(has_equity=True)

        assert where == "WHERE equity > 0"
        assert values == []

    def test_has_equity_false_adds_nothing(self):
        assert sql_for_job_filters(has_equity=False) == ("", [])

    def test_all_filters_conjunctive_in_order(self):
        where, values = sql_for_job_filters(title="dev", min_salary=50000, has_equity=True)

        assert where == "WHERE LOWER(title) LIKE $1 AND salary >= $2 AND equity > 0"
        assert values == ["%dev%", 50000]


class TestBindPositional:
    """Tests for bind_positional"""

    def test_rewrites_placeholders(self):
        sql, params = bind_positional('UPDATE jobs SET "title"=$1 WHERE id = $2', ["Dev", 7])

        assert sql == 'UPDATE jobs SET "title"=:p1 WHERE id = :p2'
        assert params == {"p1": "Dev", "p2": 7}

    def test_double_digit_placeholders(self):
        values = list(range(11))
        sql, params = bind_positional("$10 $11 $1", values)

        assert sql == ":p10 :p11 :p1"
        assert params["p11"] == 10

    def test_missing_value_raises(self):
        with pytest.raises(ValueError):
            bind_positional("a = $1 AND b = $2", ["only-one"])
