"""Tests for PrismaTranslator clause assembly."""

from __future__ import annotations

import pytest

from fluent_query import (
    CollisionPolicy,
    Condition,
    ConditionGroup,
    ConditionOperator,
    InvalidOperandError,
    LogicalOperator,
    PrismaTranslator,
    QuerySpecification,
    SortDirection,
    UnsupportedOperatorError,
    translate,
)


def _eq(field: str, value: object) -> Condition:
    return Condition(field=field, operator=ConditionOperator.EQ, value=value)


def _group(combinator: LogicalOperator, *children) -> ConditionGroup:
    return ConditionGroup(combinator=combinator, children=children)


# -- Clause assembly ---------------------------------------------------------


def test_empty_specification(spec: QuerySpecification, translator: PrismaTranslator):
    assert translator.translate(spec) == {"skip": 0, "take": 10}


def test_skip_take_follow_pagination(
    spec: QuerySpecification, translator: PrismaTranslator
):
    clauses = translator.translate(spec.set_pagination(4, 25))
    assert clauses["skip"] == 75
    assert clauses["take"] == 25


@pytest.mark.parametrize(("page", "limit"), [(1, 1), (2, 7), (10, 1000)])
def test_skip_take_property(spec, translator, page, limit):
    clauses = translator.translate(spec.set_pagination(page, limit))
    assert clauses["skip"] == (page - 1) * limit
    assert clauses["take"] == limit


def test_full_bundle(spec: QuerySpecification, translator: PrismaTranslator):
    full = (
        spec.where("status", "EQ", "active")
        .add_sort("createdAt", SortDirection.DESC)
        .add_include("posts")
        .set_pagination(2, 10)
    )
    assert translator.translate(full) == {
        "where": {"status": {"equals": "active"}},
        "orderBy": {"createdAt": "desc"},
        "include": {"posts": True},
        "skip": 10,
        "take": 10,
    }


def test_module_level_translate(spec: QuerySpecification):
    assert translate(spec.where("a", "EQ", 1)) == {
        "where": {"a": {"equals": 1}},
        "skip": 0,
        "take": 10,
    }


def test_translation_is_repeatable(
    spec: QuerySpecification, translator: PrismaTranslator
):
    full = (
        spec.where("author.email", "EQ", "a@b.com")
        .where("author.verified", "EQ", True)
        .add_condition_group(_eq("role", "admin") | _eq("role", "owner"))
        .where("tags", "IN", ["x", "y"])
        .add_sort("name")
        .add_sort("author.name", "DESC")
        .add_include("posts")
    )
    first = translator.translate(full)
    first["where"]["AND"].clear()
    second = translator.translate(full)
    assert translator.translate(full) == second
    assert second["where"]["AND"]


def test_spec_reused_after_translation(
    spec: QuerySpecification, translator: PrismaTranslator
):
    base = spec.where("tags", "IN", ["x"])
    translator.translate(base)["where"]["tags"]["in"].append("y")
    assert base.get_filters()[0].value == ["x"]


# -- Where: leaves and paths -------------------------------------------------


def test_between(spec: QuerySpecification, translator: PrismaTranslator):
    clauses = translator.translate(spec.where("age", "BETWEEN", [18, 30]))
    assert clauses["where"] == {"age": {"gte": 18, "lte": 30}}


def test_between_wrong_arity(spec: QuerySpecification, translator: PrismaTranslator):
    with pytest.raises(InvalidOperandError):
        translator.translate(spec.where("age", "BETWEEN", [18]))


def test_between_wrong_arity_inside_group(
    spec: QuerySpecification, translator: PrismaTranslator
):
    bad = Condition(field="age", operator=ConditionOperator.BETWEEN, value=[1, 2, 3])
    with pytest.raises(InvalidOperandError):
        translator.translate(spec.add_condition_group(_eq("a", 1) | bad))


def test_unsupported_operator_from_invalid_spec(
    spec: QuerySpecification, translator: PrismaTranslator
):
    forged = Condition.model_construct(field="name", operator="REGEX", value="^a")
    with pytest.raises(UnsupportedOperatorError):
        translator.translate(spec.add_condition(forged))


def test_nested_path(spec: QuerySpecification, translator: PrismaTranslator):
    clauses = translator.translate(spec.where("author.email", "EQ", "a@b.com"))
    assert clauses["where"] == {"author": {"email": {"equals": "a@b.com"}}}


def test_deep_nested_path(spec: QuerySpecification, translator: PrismaTranslator):
    clauses = translator.translate(spec.where("a.b.c", "GT", 1))
    assert clauses["where"] == {"a": {"b": {"c": {"gt": 1}}}}


# -- Where: top-level merge-or-wrap ------------------------------------------


def test_top_level_conditions_merge(
    spec: QuerySpecification, translator: PrismaTranslator
):
    clauses = translator.translate(
        spec.where("status", "EQ", "active").where("age", "GTE", 18)
    )
    assert clauses["where"] == {"status": {"equals": "active"}, "age": {"gte": 18}}


def test_top_level_single_group_not_wrapped(
    spec: QuerySpecification, translator: PrismaTranslator
):
    group = _eq("status", "active") | _eq("status", "pending")
    clauses = translator.translate(spec.add_condition_group(group))
    assert clauses["where"] == {
        "OR": [{"status": {"equals": "active"}}, {"status": {"equals": "pending"}}]
    }


def test_top_level_group_and_condition_wrap(
    spec: QuerySpecification, translator: PrismaTranslator
):
    group = _eq("role", "admin") | _eq("role", "owner")
    clauses = translator.translate(
        spec.where("active", "EQ", True).add_condition_group(group)
    )
    assert clauses["where"] == {
        "AND": [
            {"active": {"equals": True}},
            {"OR": [{"role": {"equals": "admin"}}, {"role": {"equals": "owner"}}]},
        ]
    }


def test_top_level_shared_relation_merges(
    spec: QuerySpecification, translator: PrismaTranslator
):
    clauses = translator.translate(
        spec.where("author.email", "EQ", "a@b.com").where("author.verified", "EQ", True)
    )
    assert clauses["where"] == {
        "author": {"email": {"equals": "a@b.com"}, "verified": {"equals": True}}
    }


# -- Where: groups -----------------------------------------------------------


def test_or_group_never_merges(translator: PrismaTranslator):
    group = _group(LogicalOperator.OR, _eq("status", "active"), _eq("status", "pending"))
    assert translator.translate_where([group]) == {
        "OR": [{"status": {"equals": "active"}}, {"status": {"equals": "pending"}}]
    }


def test_or_group_keeps_disjoint_fields_separate(translator: PrismaTranslator):
    group = _group(LogicalOperator.OR, _eq("a", 1), _eq("b", 2))
    assert translator.translate_where([group]) == {
        "OR": [{"a": {"equals": 1}}, {"b": {"equals": 2}}]
    }


def test_not_group(translator: PrismaTranslator):
    group = _group(LogicalOperator.NOT, _eq("status", "banned"))
    assert translator.translate_where([group]) == {
        "NOT": [{"status": {"equals": "banned"}}]
    }


def test_and_group_merges_relation_prefix(translator: PrismaTranslator):
    group = _group(
        LogicalOperator.AND,
        _eq("author.email", "a@b.com"),
        _eq("author.verified", True),
    )
    assert translator.translate_where([group]) == {
        "author": {"email": {"equals": "a@b.com"}, "verified": {"equals": True}}
    }


def test_and_group_with_nested_group_wraps(translator: PrismaTranslator):
    group = _group(
        LogicalOperator.AND,
        _eq("active", True),
        _group(LogicalOperator.OR, _eq("a", 1), _eq("b", 2)),
    )
    assert translator.translate_where([group]) == {
        "AND": [
            {"active": {"equals": True}},
            {"OR": [{"a": {"equals": 1}}, {"b": {"equals": 2}}]},
        ]
    }


def test_and_group_single_child(translator: PrismaTranslator):
    group = _group(LogicalOperator.AND, _eq("a", 1))
    assert translator.translate_where([group]) == {"a": {"equals": 1}}


def test_empty_groups(translator: PrismaTranslator):
    assert translator.translate_where([_group(LogicalOperator.AND)]) == {}
    assert translator.translate_where([_group(LogicalOperator.OR)]) == {"OR": []}


def test_deeply_nested_groups(translator: PrismaTranslator):
    tree = _group(
        LogicalOperator.OR,
        _group(
            LogicalOperator.AND,
            _eq("author.name", "Ann"),
            Condition(field="author.age", operator=ConditionOperator.GT, value=30),
        ),
        _group(
            LogicalOperator.NOT,
            _group(LogicalOperator.OR, _eq("a", 1), _eq("b", 2)),
        ),
    )
    assert translator.translate_where([tree]) == {
        "OR": [
            {"author": {"name": {"equals": "Ann"}, "age": {"gt": 30}}},
            {"NOT": [{"OR": [{"a": {"equals": 1}}, {"b": {"equals": 2}}]}]},
        ]
    }


def test_translate_where_empty(translator: PrismaTranslator):
    assert translator.translate_where([]) == {}


# -- Collision policy --------------------------------------------------------


def test_default_policy_overwrites(
    spec: QuerySpecification, translator: PrismaTranslator
):
    clauses = translator.translate(
        spec.where("status", "EQ", "active").where("status", "EQ", "pending")
    )
    assert clauses["where"] == {"status": {"equals": "pending"}}


def test_default_policy_combines_range(
    spec: QuerySpecification, translator: PrismaTranslator
):
    clauses = translator.translate(spec.where("age", "GTE", 18).where("age", "LTE", 30))
    assert clauses["where"] == {"age": {"gte": 18, "lte": 30}}


def test_wrap_policy_keeps_both(spec: QuerySpecification):
    translator = PrismaTranslator(on_collision=CollisionPolicy.WRAP)
    clauses = translator.translate(
        spec.where("status", "EQ", "active").where("status", "EQ", "pending")
    )
    assert clauses["where"] == {
        "AND": [{"status": {"equals": "active"}}, {"status": {"equals": "pending"}}]
    }


def test_wrap_policy_still_merges_without_collision(spec: QuerySpecification):
    translator = PrismaTranslator(on_collision="wrap")
    clauses = translator.translate(
        spec.where("author.email", "EQ", "a@b.com").where("author.verified", "EQ", True)
    )
    assert clauses["where"] == {
        "author": {"email": {"equals": "a@b.com"}, "verified": {"equals": True}}
    }


def test_default_policy_dict_operands_not_fused(
    spec: QuerySpecification, translator: PrismaTranslator
):
    clauses = translator.translate(
        spec.where("meta", "EQ", {"a": 1}).where("meta", "EQ", {"b": 2})
    )
    assert clauses["where"] == {"meta": {"equals": {"b": 2}}}


def test_wrap_policy_dict_operands(spec: QuerySpecification):
    translator = PrismaTranslator(on_collision=CollisionPolicy.WRAP)
    clauses = translator.translate(
        spec.where("meta", "EQ", {"a": 1}).where("meta", "EQ", {"b": 2})
    )
    assert clauses["where"] == {
        "AND": [{"meta": {"equals": {"a": 1}}}, {"meta": {"equals": {"b": 2}}}]
    }


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        PrismaTranslator(on_collision="explode")


# -- Order by ----------------------------------------------------------------


def test_single_sort(spec: QuerySpecification, translator: PrismaTranslator):
    assert translator.translate(spec.add_sort("name"))["orderBy"] == {"name": "asc"}


def test_multiple_sorts_keep_order(
    spec: QuerySpecification, translator: PrismaTranslator
):
    clauses = translator.translate(
        spec.add_sort("name", SortDirection.ASC).add_sort("createdAt", SortDirection.DESC)
    )
    assert clauses["orderBy"] == [{"name": "asc"}, {"createdAt": "desc"}]


def test_nested_sort(spec: QuerySpecification, translator: PrismaTranslator):
    clauses = translator.translate(spec.add_sort("author.name", SortDirection.DESC))
    assert clauses["orderBy"] == {"author": {"name": "desc"}}


def test_sorts_on_same_relation_not_merged(translator: PrismaTranslator):
    spec = QuerySpecification.create().add_sort("author.name").add_sort("author.age")
    assert translator.translate(spec)["orderBy"] == [
        {"author": {"name": "asc"}},
        {"author": {"age": "asc"}},
    ]


# -- Include -----------------------------------------------------------------


def test_include_idempotent(spec: QuerySpecification, translator: PrismaTranslator):
    clauses = translator.translate(spec.add_include("posts").add_include("posts"))
    assert clauses["include"] == {"posts": True}


def test_multiple_includes(spec: QuerySpecification, translator: PrismaTranslator):
    clauses = translator.translate(spec.add_include("posts").add_include("profile"))
    assert clauses["include"] == {"posts": True, "profile": True}
