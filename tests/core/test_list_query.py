"""List Query Planning — tests for query-string → ListQuery translation.

Tests cover:
    - Reserved directives never become filters
    - Comparator parsing, value coercion, unknown comparators and fields
    - select / sort / populate parsing and the id tie-break
    - page / limit defaults and bounds
    - paginate() next/prev rules
    - Determinism: same params → equal plans
"""

from datetime import datetime
from uuid import UUID, uuid4

import pytest

from devcamper.core.domain_types import Comparator, SortDirection
from devcamper.core.errors import ErrorKind, ValidationFailedError
from devcamper.core.list_query import (
    DEFAULT_SORT,
    MAX_SQL_INTEGER,
    TIE_BREAK,
    SortKey,
    build_list_query,
    paginate,
    project_fields,
)
from devcamper.core.resource_fields import BOOTCAMP_FIELDS, REVIEW_FIELDS


# ─── Filters ─────────────────────────────────────────────────────

def test_reserved_params_are_not_filters():
    q = build_list_query(
        {"select": "name", "sort": "name", "page": "1", "limit": "5"},
        BOOTCAMP_FIELDS,
    )
    assert q.filters == {}


def test_plain_param_is_equality_filter():
    q = build_list_query({"housing": "true"}, BOOTCAMP_FIELDS)
    assert q.filters == {"housing": {Comparator.EQ: True}}


def test_comparator_suffix_and_integer_coercion():
    q = build_list_query({"averagecost[gt]": "1000"}, BOOTCAMP_FIELDS)
    assert q.filters == {"average_cost": {Comparator.GT: 1000}}


def test_field_lookup_ignores_case_and_underscores():
    for key in ("averageCost[lte]", "average_cost[lte]", "AVERAGECOST[lte]"):
        q = build_list_query({key: "500"}, BOOTCAMP_FIELDS)
        assert q.filters == {"average_cost": {Comparator.LTE: 500}}


def test_range_on_same_field_combines():
    q = build_list_query(
        [("average_cost[gte]", "100"), ("average_cost[lt]", "900")],
        BOOTCAMP_FIELDS,
    )
    assert q.filters["average_cost"] == {
        Comparator.GTE: 100, Comparator.LT: 900,
    }


def test_in_accepts_commas_and_repeated_keys():
    q = build_list_query(
        [("rating[in]", "7,8"), ("rating[in]", "10")], REVIEW_FIELDS,
    )
    assert q.filters == {"rating": {Comparator.IN: [7, 8, 10]}}


def test_datetime_and_uuid_values_are_coerced():
    uid = uuid4()
    q = build_list_query(
        {"created_at[gte]": "2026-01-01T00:00:00", "user_id": str(uid)},
        REVIEW_FIELDS,
    )
    assert q.filters["created_at"][Comparator.GTE] == datetime(2026, 1, 1)
    assert q.filters["user_id"][Comparator.EQ] == uid


def test_unknown_comparator_rejected():
    with pytest.raises(ValidationFailedError) as exc_info:
        build_list_query({"average_cost[ne]": "5"}, BOOTCAMP_FIELDS)
    assert exc_info.value.http_status == 400
    assert exc_info.value.kind == ErrorKind.VALIDATION_FAILED
    assert "ne" in exc_info.value.message


def test_explicit_eq_token_rejected():
    with pytest.raises(ValidationFailedError):
        build_list_query({"average_cost[eq]": "5"}, BOOTCAMP_FIELDS)


def test_unknown_field_rejected():
    with pytest.raises(ValidationFailedError) as exc_info:
        build_list_query({"password": "x"}, BOOTCAMP_FIELDS)
    assert "password" in exc_info.value.message


def test_non_filterable_field_rejected():
    with pytest.raises(ValidationFailedError):
        build_list_query({"description": "x"}, BOOTCAMP_FIELDS)


def test_uncoercible_value_rejected():
    with pytest.raises(ValidationFailedError) as exc_info:
        build_list_query({"average_cost[gt]": "cheap"}, BOOTCAMP_FIELDS)
    assert "cheap" in exc_info.value.message


def test_range_comparator_on_boolean_rejected():
    with pytest.raises(ValidationFailedError):
        build_list_query({"housing[gt]": "true"}, BOOTCAMP_FIELDS)


def test_all_problems_reported_together():
    with pytest.raises(ValidationFailedError) as exc_info:
        build_list_query(
            {"nope": "1", "average_cost[xx]": "1", "page": "0"},
            BOOTCAMP_FIELDS,
        )
    assert len(exc_info.value.details) == 3


def test_base_filter_applied_and_overrides_client_value():
    bootcamp_id = uuid4()
    q = build_list_query(
        {"bootcamp_id": str(uuid4())},
        REVIEW_FIELDS,
        base_filter={"bootcamp_id": bootcamp_id},
    )
    assert q.filters["bootcamp_id"][Comparator.EQ] == bootcamp_id


# ─── select / sort / populate ────────────────────────────────────

def test_select_keeps_order_and_always_includes_id():
    q = build_list_query({"select": "description,name"}, BOOTCAMP_FIELDS)
    assert q.selected_fields == ("id", "description", "name")


def test_absent_select_means_all_fields():
    assert build_list_query({}, BOOTCAMP_FIELDS).selected_fields is None


def test_select_unknown_field_rejected():
    with pytest.raises(ValidationFailedError):
        build_list_query({"select": "name,secret"}, BOOTCAMP_FIELDS)


def test_sort_parses_directions_and_appends_tie_break():
    q = build_list_query({"sort": "name,-averageCost"}, BOOTCAMP_FIELDS)
    assert q.sort_keys == (
        SortKey("name", SortDirection.ASC),
        SortKey("average_cost", SortDirection.DESC),
        TIE_BREAK,
    )


def test_default_sort_is_newest_first():
    q = build_list_query({}, BOOTCAMP_FIELDS)
    assert q.sort_keys == DEFAULT_SORT + (TIE_BREAK,)
    assert q.sort_keys[0] == SortKey("created_at", SortDirection.DESC)


def test_sort_by_id_does_not_duplicate_tie_break():
    q = build_list_query({"sort": "-id"}, BOOTCAMP_FIELDS)
    assert q.sort_keys == (SortKey("id", SortDirection.DESC),)


def test_sort_by_unsortable_field_rejected():
    with pytest.raises(ValidationFailedError):
        build_list_query({"sort": "description"}, BOOTCAMP_FIELDS)


def test_populate_known_relation():
    q = build_list_query({"populate": "bootcamp"}, REVIEW_FIELDS)
    assert q.populate == ("bootcamp",)


def test_populate_unknown_relation_rejected():
    with pytest.raises(ValidationFailedError):
        build_list_query({"populate": "owner"}, REVIEW_FIELDS)


# ─── page / limit ────────────────────────────────────────────────

def test_page_and_limit_defaults():
    q = build_list_query({}, BOOTCAMP_FIELDS, default_limit=25, max_limit=100)
    assert (q.page, q.page_size, q.skip) == (1, 25, 0)


def test_skip_computed_from_page_and_limit():
    q = build_list_query({"page": "3", "limit": "5"}, BOOTCAMP_FIELDS)
    assert q.skip == 10


@pytest.mark.parametrize("params", [
    {"page": "0"},
    {"page": "-2"},
    {"page": "two"},
    {"limit": "0"},
    {"limit": "101"},
])
def test_invalid_page_or_limit_rejected(params):
    with pytest.raises(ValidationFailedError):
        build_list_query(params, BOOTCAMP_FIELDS, default_limit=25, max_limit=100)


def test_limit_equal_to_max_allowed():
    q = build_list_query({"limit": "100"}, BOOTCAMP_FIELDS, max_limit=100)
    assert q.page_size == 100


# ─── paginate / project_fields ───────────────────────────────────

def test_paginate_middle_page_has_both_links():
    p = paginate(page=2, page_size=5, total_count=12)
    assert (p.prev_page, p.next_page) == (1, 3)
    assert p.to_dict() == {
        "currentPage": 2, "totalCount": 12, "prevPage": 1, "nextPage": 3,
    }


def test_paginate_last_page_has_no_next():
    p = paginate(page=3, page_size=5, total_count=12)
    assert p.next_page is None
    assert "nextPage" not in p.to_dict()


def test_paginate_first_page_has_no_prev():
    p = paginate(page=1, page_size=5, total_count=12)
    assert p.prev_page is None
    assert p.next_page == 2


def test_paginate_exact_fit_has_no_next():
    assert paginate(page=2, page_size=5, total_count=10).next_page is None


def test_project_fields_keeps_selection_order():
    record = {"id": "1", "name": "a", "description": "b"}
    assert list(project_fields(record, ("id", "description"))) == ["id", "description"]
    assert project_fields(record, None) is record


# ─── Determinism ─────────────────────────────────────────────────

def test_same_params_build_equal_plans():
    params = [("averagecost[gt]", "1000"), ("sort", "-name"), ("page", "2"), ("limit", "5")]
    assert build_list_query(params, BOOTCAMP_FIELDS) == build_list_query(
        params, BOOTCAMP_FIELDS,
    )


def test_uuid_base_filter_survives_plan():
    uid = uuid4()
    q = build_list_query({}, REVIEW_FIELDS, base_filter={"bootcamp_id": uid})
    assert isinstance(q.filters["bootcamp_id"][Comparator.EQ], UUID)


# ─── Integer bounds ──────────────────────────────────────────────

_HUGE = str(10**20)


@pytest.mark.parametrize("params", [
    {"page": _HUGE},
    {"limit": _HUGE},
    {"average_cost[gt]": _HUGE},
    {"average_cost": str(-(10**20))},
    {"average_cost[in]": f"5,{_HUGE}"},
    {"average_rating[gte]": "inf"},
    {"average_rating": "nan"},
])
def test_values_outside_sql_range_rejected(params):
    with pytest.raises(ValidationFailedError) as exc_info:
        build_list_query(params, BOOTCAMP_FIELDS)
    assert exc_info.value.http_status == 400


def test_page_whose_offset_overflows_rejected():
    page = str(MAX_SQL_INTEGER // 10)
    with pytest.raises(ValidationFailedError) as exc_info:
        build_list_query({"page": page, "limit": "100"}, BOOTCAMP_FIELDS)
    assert "page is out of range" in exc_info.value.message


def test_largest_sql_integer_accepted():
    q = build_list_query({"average_cost[lte]": str(MAX_SQL_INTEGER)}, BOOTCAMP_FIELDS)
    assert q.filters["average_cost"][Comparator.LTE] == MAX_SQL_INTEGER
