"""Tests for the coupler detectors."""

import pytest

from smellscope.config import DetectionThresholds
from smellscope.detectors import (
    FeatureEnvyDetector,
    InappropriateIntimacyDetector,
    MessageChainsDetector,
)
from smellscope.findings import RefactoringKind
from smellscope.metrics import MetricTable
from smellscope.model import (
    AccessEntity,
    AccessKind,
    ClassEntity,
    FieldEntity,
    MethodEntity,
    ProgramModel,
    Receiver,
    Visibility,
)
from smellscope.suggest import RefactoringSuggester


def _detect(detector, program, **thresholds):
    t = DetectionThresholds(**thresholds)
    return detector.detect(program, MetricTable.build(program, t), t)


def _holder(class_id, *names):
    return ClassEntity(id=class_id, fields=tuple(FieldEntity("self", n) for n in names))


class TestFeatureEnvy:
    def test_tie_is_ambiguous(self):
        report = ClassEntity(
            id="Report",
            methods=(
                MethodEntity(
                    "self",
                    "build",
                    accesses=(
                        AccessEntity("x", "Sales"),
                        AccessEntity("y", "Sales"),
                        AccessEntity("p", "Stock"),
                        AccessEntity("q", "Stock"),
                    ),
                ),
            ),
        )
        program = ProgramModel([report, _holder("Sales", "x", "y"), _holder("Stock", "p", "q")])
        finding = _detect(FeatureEnvyDetector(), program).findings[0]
        assert finding.ambiguous
        assert finding.secondary == ("Sales", "Stock")
        plan = RefactoringSuggester().suggest(finding)
        assert plan.kind is RefactoringKind.MOVE_FUNCTION
        assert plan.target_class is None

    def test_ratio_at_threshold_not_flagged(self):
        order = ClassEntity(
            id="Order",
            fields=(FieldEntity("self", "a"), FieldEntity("self", "b")),
            methods=(
                MethodEntity(
                    "self",
                    "total",
                    accesses=(
                        AccessEntity("a", "self"),
                        AccessEntity("b", "self"),
                        AccessEntity("x", "Customer"),
                        AccessEntity("y", "Customer"),
                    ),
                ),
            ),
        )
        program = ProgramModel([order, _holder("Customer", "x", "y")])
        assert _detect(FeatureEnvyDetector(), program).findings == []

    def test_single_member_is_not_envy(self):
        order = ClassEntity(
            id="Order",
            methods=(
                MethodEntity("self", "total", accesses=(AccessEntity("x", "Customer"),) * 3),
            ),
        )
        program = ProgramModel([order, _holder("Customer", "x")])
        assert _detect(FeatureEnvyDetector(), program).findings == []

    def test_own_calls_suggest_extract_then_move(self):
        order = ClassEntity(
            id="Order",
            methods=(
                MethodEntity("self", "helper"),
                MethodEntity(
                    "self",
                    "total",
                    accesses=(
                        AccessEntity("helper", "self", AccessKind.CALL),
                        AccessEntity("a", "Customer"),
                        AccessEntity("b", "Customer"),
                        AccessEntity("c", "Customer"),
                    ),
                ),
            ),
        )
        program = ProgramModel([order, _holder("Customer", "a", "b", "c")])
        finding = _detect(FeatureEnvyDetector(), program).findings[0]
        assert finding.evidence_value("calls_own_methods") == 1
        plan = RefactoringSuggester().suggest(finding)
        assert plan.kind is RefactoringKind.EXTRACT_AND_MOVE_FUNCTION
        assert plan.target_class == "Customer"

    def test_threshold_is_configurable(self, envy_program):
        assert _detect(FeatureEnvyDetector(), envy_program, feature_envy_ratio=0.8).findings == []


def _intimate_pair(superclass=None, visibility=Visibility.PRIVATE, backward=True):
    a_methods = (MethodEntity("self", "peek", accesses=(AccessEntity("secretB", "Beta"),)),)
    b_accesses = (AccessEntity("secretA", "Alpha"),) if backward else ()
    alpha = ClassEntity(
        id="Alpha",
        fields=(FieldEntity("self", "secretA", visibility=visibility),),
        methods=a_methods,
        superclass=superclass,
    )
    beta = ClassEntity(
        id="Beta",
        fields=(FieldEntity("self", "secretB", visibility=visibility),),
        methods=(MethodEntity("self", "poke", accesses=b_accesses),),
    )
    return ProgramModel([beta, alpha])


class TestInappropriateIntimacy:
    def test_bidirectional_private_access(self):
        finding = _detect(InappropriateIntimacyDetector(), _intimate_pair()).findings[0]
        assert finding.primary == "Alpha"
        assert finding.secondary == ("Beta",)
        assert finding.evidence_value("field_accesses") == 2
        plan = RefactoringSuggester().suggest(finding)
        assert plan.kind is RefactoringKind.MOVE_FIELD
        assert plan.target_class == "Alpha"

    def test_one_way_access_ignored(self):
        program = _intimate_pair(backward=False)
        assert _detect(InappropriateIntimacyDetector(), program).findings == []

    def test_public_members_ignored(self):
        program = _intimate_pair(visibility=Visibility.PUBLIC)
        assert _detect(InappropriateIntimacyDetector(), program).findings == []

    def test_inheritance_pair_excluded(self):
        program = _intimate_pair(superclass="Beta")
        assert _detect(InappropriateIntimacyDetector(), program).findings == []


def _chains(count, depth_two=True):
    department = ClassEntity(
        id="Department",
        fields=(FieldEntity("self", "head"),),
        methods=(MethodEntity("self", "getManager", accesses=(AccessEntity("head", "self"),)),),
    )
    person = ClassEntity(
        id="Person",
        fields=(FieldEntity("self", "department"),),
        methods=(MethodEntity("self", "getDepartment", accesses=(AccessEntity("department", "self"),)),),
    )
    chain = (
        AccessEntity("getDepartment", "Person", AccessKind.CALL, returns="Department"),
        AccessEntity("getManager", "Department", AccessKind.CALL, receiver=Receiver.RESULT),
    )
    clients = [
        ClassEntity(
            id=f"Client{i}",
            methods=(MethodEntity("self", "lookup", accesses=chain if depth_two else chain[:1]),),
        )
        for i in range(count)
    ]
    return ProgramModel([department, person, *clients])


class TestMessageChains:
    def test_depth_below_minimum(self):
        assert _detect(MessageChainsDetector(), _chains(1, depth_two=False)).findings == []

    def test_minimum_depth_configurable(self, chain_program):
        assert _detect(MessageChainsDetector(), chain_program, message_chain_min_depth=3).findings == []

    def test_shared_intermediate_escalates(self):
        single = _detect(MessageChainsDetector(), _chains(1)).findings[0]
        shared = _detect(MessageChainsDetector(), _chains(3)).findings
        assert len(shared) == 3
        assert all(f.evidence_value("intermediate_sites") == 3 for f in shared)
        assert shared[0].severity == pytest.approx(single.severity + 0.2)

    def test_malformed_chain_skipped(self, chain_program):
        broken = ClassEntity(
            id="Broken",
            methods=(
                MethodEntity(
                    "self",
                    "walk",
                    accesses=(
                        AccessEntity("getManager", "Department", AccessKind.CALL, receiver=Receiver.RESULT),
                    ),
                ),
            ),
        )
        program = ProgramModel([*chain_program.classes, broken])
        result = _detect(MessageChainsDetector(), program)
        assert [f.primary for f in result.findings] == ["Client.findManager"]
        assert [s.entity for s in result.skipped] == ["Broken.walk"]
        assert result.skipped[0].detector == "message_chains"
