"""Tests for per-class metrics."""

import pytest

from smellscope.metrics import (
    field_prefix_groups,
    field_usage_ratio,
    inherited_members,
    inherited_usage_ratio,
    statement_count,
    type_switch_count,
)
from smellscope.metrics.class_metrics import (
    name_prefix,
    overridden_methods,
    used_inherited_members,
)
from smellscope.model import (
    AccessEntity,
    ClassEntity,
    FieldEntity,
    MethodEntity,
    ProgramModel,
    SwitchEntity,
    TypeTag,
    Visibility,
)


def _inheritance_program():
    parent = ClassEntity(
        id="Collection",
        fields=(
            FieldEntity("self", "items", visibility=Visibility.PROTECTED),
            FieldEntity("self", "secret"),
        ),
        methods=(
            MethodEntity("self", "add"),
            MethodEntity("self", "remove"),
            MethodEntity("self", "size"),
            MethodEntity("self", "constructor"),
        ),
    )
    child = ClassEntity(
        id="Stack",
        methods=(
            MethodEntity(
                "self",
                "push",
                accesses=(AccessEntity("items", "self"), AccessEntity("add", "self")),
            ),
            MethodEntity("self", "size"),
        ),
        superclass="Collection",
    )
    return ProgramModel([parent, child])


class TestSizeMetrics:
    def test_statement_count_sums_methods(self, envy_program):
        assert statement_count(envy_program.get_class("Customer")) == 4

    def test_type_switch_count(self, switch_program):
        assert type_switch_count(switch_program, switch_program.get_class("Employee")) == 4

    def test_switch_on_plain_field_ignored(self):
        method = MethodEntity("self", "f", switches=(SwitchEntity("mode"),))
        cls = ClassEntity(id="A", fields=(FieldEntity("self", "mode"),), methods=(method,))
        program = ProgramModel([cls])
        assert type_switch_count(program, program.get_class("A")) == 0


class TestInheritance:
    def test_inherited_members_skip_private_and_constructors(self):
        program = _inheritance_program()
        members = inherited_members(program, program.get_class("Stack"))
        assert set(members) == {"items", "add", "remove", "size"}

    def test_used_inherited_members(self):
        program = _inheritance_program()
        assert used_inherited_members(program, program.get_class("Stack")) == {"items", "add"}

    def test_overridden_methods(self):
        program = _inheritance_program()
        assert overridden_methods(program, program.get_class("Stack")) == {"size"}

    def test_usage_ratio(self):
        program = _inheritance_program()
        assert inherited_usage_ratio(program, program.get_class("Stack")) == pytest.approx(0.5)

    def test_root_class_ratio_is_one(self):
        program = _inheritance_program()
        assert inherited_usage_ratio(program, program.get_class("Collection")) == 1.0


class TestFieldUsage:
    def test_ratio_ignores_constructor(self):
        cls = ClassEntity(
            id="Report",
            fields=(FieldEntity("self", "cache"),),
            methods=(
                MethodEntity("self", "constructor", accesses=(AccessEntity("cache", "self"),)),
                MethodEntity("self", "render", accesses=(AccessEntity("cache", "self"),)),
                MethodEntity("self", "title"),
            ),
        )
        program = ProgramModel([cls])
        assert field_usage_ratio(program.get_class("Report"), "cache") == pytest.approx(0.5)

    def test_ratio_without_methods(self):
        cls = ClassEntity(id="Empty", fields=(FieldEntity("self", "x"),))
        assert field_usage_ratio(cls, "x") == 0.0


class TestNamePrefix:
    @pytest.mark.parametrize(
        "name, prefix",
        [
            ("rangeStart", "range"),
            ("range_end", "range"),
            ("_rangeStep", "range"),
            ("zipCode", "zip"),
            ("x", "x"),
        ],
    )
    def test_first_word(self, name, prefix):
        assert name_prefix(name) == prefix

    def test_groups(self):
        groups = field_prefix_groups(["rangeStart", "rangeEnd", "label"])
        assert groups == {"range": ["rangeStart", "rangeEnd"], "label": ["label"]}
