"""Tests for per-method metrics."""

import pytest

from smellscope.exceptions import MetricComputationError
from smellscope.metrics import (
    chain_depth,
    external_access_ratio,
    is_accessor,
)
from smellscope.metrics.method_metrics import (
    calls_own_methods,
    chain_runs,
    envy_by_class,
    is_constructor,
)
from smellscope.model import (
    AccessEntity,
    AccessKind,
    ClassEntity,
    FieldEntity,
    MethodEntity,
    ProgramModel,
    Receiver,
    TypeTag,
)


def _person_program(*client_methods):
    department = ClassEntity(
        id="Department",
        fields=(FieldEntity("self", "manager", TypeTag.REFERENCE),),
        methods=(MethodEntity("self", "getManager", accesses=(AccessEntity("manager", "self"),)),),
    )
    person = ClassEntity(
        id="Person",
        fields=(FieldEntity("self", "department", TypeTag.REFERENCE, type_name="Department"),),
        methods=(
            MethodEntity("self", "getDepartment", accesses=(AccessEntity("department", "self"),)),
            *client_methods,
        ),
    )
    return ProgramModel([department, person])


class TestChainDepth:
    def test_two_hop_chain(self, chain_program):
        method = chain_program.get_method("Client.findManager")
        assert chain_depth(chain_program, method) == 2

    def test_own_field_is_not_a_hop(self):
        """this.department.getManager() has depth 1."""
        method = MethodEntity(
            "self",
            "manager",
            accesses=(
                AccessEntity("department", "self", returns="Department", receiver=Receiver.SELF),
                AccessEntity("getManager", "Department", AccessKind.CALL, receiver=Receiver.RESULT),
            ),
        )
        program = _person_program(method)
        assert chain_depth(program, program.get_method("Person.manager")) == 1

    def test_independent_accesses_do_not_chain(self, envy_program):
        method = envy_program.get_method("Order.computeTotal")
        assert chain_depth(envy_program, method) == 1

    def test_no_accesses(self):
        program = ProgramModel([ClassEntity(id="A", methods=(MethodEntity("self", "noop"),))])
        assert chain_depth(program, program.get_method("A.noop")) == 0

    def test_chain_on_nothing_raises(self):
        method = MethodEntity(
            "self",
            "broken",
            accesses=(
                AccessEntity("getManager", "Department", AccessKind.CALL, receiver=Receiver.RESULT),
            ),
        )
        program = _person_program(method)
        with pytest.raises(MetricComputationError) as exc_info:
            chain_depth(program, program.get_method("Person.broken"))
        assert exc_info.value.metric == "chain_depth"
        assert exc_info.value.entity == "Person.broken"

    def test_chain_on_untyped_result_raises(self):
        method = MethodEntity(
            "self",
            "broken",
            accesses=(
                AccessEntity("getDepartment", "Person", AccessKind.CALL),
                AccessEntity("getManager", "Department", AccessKind.CALL, receiver=Receiver.RESULT),
            ),
        )
        program = _person_program(method)
        with pytest.raises(MetricComputationError, match="chain_depth"):
            chain_depth(program, program.get_method("Person.broken"))

    def test_chain_on_wrong_class_raises(self):
        method = MethodEntity(
            "self",
            "broken",
            accesses=(
                AccessEntity("getDepartment", "Person", AccessKind.CALL, returns="Department"),
                AccessEntity("getDepartment", "Person", AccessKind.CALL, receiver=Receiver.RESULT),
            ),
        )
        program = _person_program(method)
        with pytest.raises(MetricComputationError):
            chain_depth(program, program.get_method("Person.broken"))

    def test_runs_split_on_fresh_receiver(self, chain_program):
        runs = chain_runs(chain_program, chain_program.get_method("Client.findManager"))
        assert len(runs) == 1
        assert [a.target for a in runs[0]] == ["getDepartment", "getManager"]


class TestExternalAccess:
    def test_ratio(self, envy_program):
        method = envy_program.get_method("Order.computeTotal")
        assert external_access_ratio(envy_program, method) == pytest.approx(5 / 7)

    def test_ratio_without_accesses(self):
        program = ProgramModel([ClassEntity(id="A", methods=(MethodEntity("self", "noop"),))])
        assert external_access_ratio(program, program.get_method("A.noop")) == 0.0

    def test_inherited_members_count_as_own(self):
        base = ClassEntity(id="Base", fields=(FieldEntity("self", "x"),))
        child = ClassEntity(
            id="Child",
            methods=(MethodEntity("self", "f", accesses=(AccessEntity("x", "Base"),)),),
            superclass="Base",
        )
        program = ProgramModel([base, child])
        assert external_access_ratio(program, program.get_method("Child.f")) == 0.0

    def test_envy_by_class(self, envy_program):
        envy = envy_by_class(envy_program, envy_program.get_method("Order.computeTotal"))
        assert envy == {"Customer": (5, 4)}

    def test_calls_own_methods(self, envy_program):
        assert not calls_own_methods(envy_program, envy_program.get_method("Order.computeTotal"))


class TestAccessors:
    def test_getter(self, chain_program):
        assert is_accessor(chain_program, chain_program.get_method("Person.getDepartment"))

    def test_branching_getter_is_not_accessor(self, envy_program):
        assert not is_accessor(envy_program, envy_program.get_method("Customer.getDiscount"))

    def test_non_accessor_name(self, envy_program):
        assert not is_accessor(envy_program, envy_program.get_method("Order.computeTotal"))

    def test_getter_calling_out_is_not_accessor(self, chain_program):
        method = MethodEntity(
            "self", "getBoss", accesses=(AccessEntity("getManager", "Department", AccessKind.CALL),)
        )
        program = ProgramModel([*chain_program.classes, ClassEntity(id="Agent", methods=(method,))])
        assert not is_accessor(program, program.get_method("Agent.getBoss"))

    @pytest.mark.parametrize("name", ["constructor", "__init__", "init", "<init>", "Widget"])
    def test_constructor_names(self, name):
        assert is_constructor(MethodEntity("Widget", name))

    def test_regular_method_is_not_constructor(self):
        assert not is_constructor(MethodEntity("Widget", "render"))
