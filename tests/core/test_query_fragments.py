"""Query Fragments — WHERE/SET builders, allowlist gate, positional binding.

Tests cover:
    - Empty field lists produce empty fragments
    - AND/= counts for condition clauses of any length
    - Caller order is preserved, duplicates are kept
    - require_allowed_fields rejects every unknown name at once
    - bind_positional aligns :pN names with values and checks counts
"""

import pytest

from user_service.core.domain_types import FILTERABLE_COLUMNS, WRITABLE_COLUMNS
from user_service.core.errors import UnknownFieldError
from user_service.core.query_fragments import (
    bind_positional,
    build_assignment_clause,
    build_condition_clause,
    require_allowed_fields,
)


# ─── build_condition_clause ──────────────────────────────────────

def test_condition_clause_empty_is_empty_string():
    assert build_condition_clause([]) == ""


def test_condition_clause_single_field():
    assert build_condition_clause(["role"]) == " WHERE role = ?"


def test_condition_clause_joins_with_and_in_caller_order():
    clause = build_condition_clause(["role", "full_name"])
    assert clause == " WHERE role = ? AND full_name = ?"


@pytest.mark.parametrize("count", [1, 2, 3, 4])
def test_condition_clause_operator_counts(count):
    fields = list(FILTERABLE_COLUMNS[:count])
    clause = build_condition_clause(fields)
    assert clause.count(" AND ") == count - 1
    assert clause.count("=") == count
    assert clause.count("?") == count


def test_condition_clause_keeps_duplicates():
    assert build_condition_clause(["id", "id"]) == " WHERE id = ? AND id = ?"


def test_condition_clause_accepts_dict_keys():
    assert build_condition_clause({"role": "lead"}.keys()) == " WHERE role = ?"


# ─── build_assignment_clause ─────────────────────────────────────

def test_assignment_clause_empty_is_empty_string():
    assert build_assignment_clause([]) == ""


def test_assignment_clause_comma_joined():
    clause = build_assignment_clause(["full_name", "efficiency"])
    assert clause == "full_name = ?,efficiency = ?"


def test_assignment_clause_has_no_where():
    assert "WHERE" not in build_assignment_clause(["role"])


# ─── require_allowed_fields ──────────────────────────────────────

def test_allowed_fields_pass_through_as_list():
    assert require_allowed_fields(("role", "id"), FILTERABLE_COLUMNS) == ["role", "id"]


def test_empty_fields_are_allowed():
    assert require_allowed_fields([], WRITABLE_COLUMNS) == []


def test_unknown_fields_all_reported():
    with pytest.raises(UnknownFieldError) as exc:
        require_allowed_fields(
            ["role", "password", "1=1; DROP TABLE users; --"], FILTERABLE_COLUMNS,
        )
    assert exc.value.fields == ["password", "1=1; DROP TABLE users; --"]
    assert exc.value.http_status == 400


def test_id_is_not_writable():
    with pytest.raises(UnknownFieldError):
        require_allowed_fields(["id"], WRITABLE_COLUMNS)


# ─── bind_positional ─────────────────────────────────────────────

def test_bind_positional_names_placeholders_in_order():
    sql, binds = bind_positional(
        "UPDATE users SET role = ?,efficiency = ? WHERE id = ?", ["lead", 0.7, 3],
    )
    assert sql == "UPDATE users SET role = :p0,efficiency = :p1 WHERE id = :p2"
    assert binds == {"p0": "lead", "p1": 0.7, "p2": 3}


def test_bind_positional_without_placeholders():
    assert bind_positional("SELECT * FROM users", []) == ("SELECT * FROM users", {})


def test_bind_positional_rejects_count_mismatch():
    with pytest.raises(ValueError, match="2 placeholders"):
        bind_positional("SELECT * FROM users WHERE id = ? AND role = ?", [1])


def test_builder_output_binds_cleanly():
    fields = ["full_name", "role"]
    sql = "SELECT * FROM users" + build_condition_clause(fields)
    template, binds = bind_positional(sql, ["Ada", "lead"])
    assert template == "SELECT * FROM users WHERE full_name = :p0 AND role = :p1"
    assert list(binds.values()) == ["Ada", "lead"]
