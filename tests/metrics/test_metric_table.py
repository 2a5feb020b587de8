"""Tests for MetricTable collection and error storage."""

import pytest

from smellscope.config import DetectionThresholds
from smellscope.exceptions import MetricComputationError
from smellscope.metrics import MetricTable
from smellscope.model import (
    AccessEntity,
    AccessKind,
    ClassEntity,
    MethodEntity,
    ProgramModel,
    Receiver,
)


def _broken_chain_program():
    target = ClassEntity(id="Target", methods=(MethodEntity("self", "ping"),))
    caller = ClassEntity(
        id="Caller",
        methods=(
            MethodEntity(
                "self",
                "dangling",
                accesses=(AccessEntity("ping", "Target", AccessKind.CALL, receiver=Receiver.RESULT),),
            ),
            MethodEntity("self", "fine", accesses=(AccessEntity("ping", "Target", AccessKind.CALL),)),
        ),
    )
    return ProgramModel([target, caller])


class TestBuild:
    def test_class_metrics(self, envy_program):
        table = MetricTable.build(envy_program)
        order = table.for_class("Order")
        assert order.field_count == 3
        assert order.method_count == 1
        assert order.statement_count == 6

    def test_method_metrics(self, chain_program):
        table = MetricTable.build(chain_program)
        mm = table.for_method("Client.findManager")
        assert mm.parameter_count == 1
        assert mm.external_access_ratio == 1.0
        assert mm.chain_depth == 2

    def test_clumps_use_thresholds(self, clump_program):
        assert len(MetricTable.build(clump_program).clumps) == 1
        strict = DetectionThresholds(data_clump_min_recurrence=4)
        assert MetricTable.build(clump_program, strict).clumps == ()

    def test_parallel_matches_sequential(self, envy_program):
        sequential = MetricTable.build(envy_program)
        parallel = MetricTable.build(envy_program, workers=4)
        for cls in envy_program:
            assert parallel.for_class(cls.id) == sequential.for_class(cls.id)
        for method in envy_program.methods():
            assert parallel.for_method(method.id) == sequential.for_method(method.id)

    def test_unknown_entity_raises_key_error(self, envy_program):
        with pytest.raises(KeyError):
            MetricTable.build(envy_program).for_class("Nope")


class TestMetricErrors:
    def test_failure_is_stored_not_raised(self):
        table = MetricTable.build(_broken_chain_program())
        assert ("chain_depth", "Caller.dangling") in table.errors
        assert table.for_method("Caller.dangling").chain_depth is None

    def test_chain_depth_reraises_stored_error(self):
        table = MetricTable.build(_broken_chain_program())
        with pytest.raises(MetricComputationError) as exc_info:
            table.chain_depth("Caller.dangling")
        assert exc_info.value.entity == "Caller.dangling"

    def test_failure_is_local(self):
        table = MetricTable.build(_broken_chain_program())
        assert table.chain_depth("Caller.fine") == 1
        assert table.for_method("Caller.dangling").external_access_ratio == 1.0

    def test_errors_property_is_a_copy(self):
        table = MetricTable.build(_broken_chain_program())
        table.errors.clear()
        assert table.errors
