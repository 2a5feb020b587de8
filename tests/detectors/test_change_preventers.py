"""Tests for the change-history detectors."""

from smellscope.config import DetectionThresholds
from smellscope.detectors import DivergentChangeDetector, ShotgunSurgeryDetector
from smellscope.findings import RefactoringKind
from smellscope.metrics import MetricTable
from smellscope.model import ChangeSet, ClassEntity, FieldEntity, MethodEntity, ProgramModel
from smellscope.suggest import RefactoringSuggester


def _detect(detector, program, **thresholds):
    t = DetectionThresholds(**thresholds)
    return detector.detect(program, MetricTable.build(program, t), t)


def _classes():
    return [
        ClassEntity(
            id=name,
            fields=(FieldEntity("self", "x"), FieldEntity("self", "y")),
            methods=(MethodEntity("self", "m"),),
        )
        for name in ("Audit", "Billing", "Catalog")
    ]


def _changes(*groups):
    return [ChangeSet(f"c{i}", frozenset(touched)) for i, touched in enumerate(groups)]


class TestShotgunSurgery:
    def test_no_history_no_findings(self):
        assert _detect(ShotgunSurgeryDetector(), ProgramModel(_classes())).findings == []

    def test_recurring_scattered_change(self):
        program = ProgramModel(
            _classes(),
            _changes(
                {"Audit.x", "Billing.x", "Catalog.m"},
                {"Audit.x", "Billing.m", "Catalog.x"},
            ),
        )
        finding = _detect(ShotgunSurgeryDetector(), program).findings[0]
        assert finding.primary == "Audit"
        assert finding.secondary == ("Billing", "Catalog")
        assert finding.evidence_value("co_changes") == 2
        assert finding.evidence_value("dominant_class") is None
        plan = RefactoringSuggester().suggest(finding)
        assert plan.kind is RefactoringKind.COMBINE_FUNCTIONS_INTO_CLASS
        assert plan.target_class is None

    def test_single_occurrence_ignored(self):
        program = ProgramModel(_classes(), _changes({"Audit.x", "Billing.x", "Catalog.m"}))
        assert _detect(ShotgunSurgeryDetector(), program).findings == []

    def test_too_few_classes_ignored(self):
        program = ProgramModel(_classes(), _changes({"Audit.x", "Billing.x"}, {"Audit.x", "Billing.x"}))
        assert _detect(ShotgunSurgeryDetector(), program).findings == []

    def test_dominant_class_receives_functions(self):
        touched = {"Audit.x", "Audit.m", "Audit.y", "Billing.m", "Catalog.m"}
        program = ProgramModel(_classes(), _changes(touched, touched))
        finding = _detect(ShotgunSurgeryDetector(), program).findings[0]
        assert finding.evidence_value("dominant_class") == "Audit"
        assert finding.evidence_value("field_share") == 0.4
        plan = RefactoringSuggester().suggest(finding)
        assert plan.kind is RefactoringKind.MOVE_FUNCTION
        assert plan.target_class == "Audit"

    def test_dominant_class_receives_fields(self):
        touched = {"Audit.x", "Audit.y", "Billing.x", "Catalog"}
        program = ProgramModel(_classes(), _changes(touched, touched))
        finding = _detect(ShotgunSurgeryDetector(), program).findings[0]
        assert finding.evidence_value("field_share") == 1.0
        assert RefactoringSuggester().suggest(finding).kind is RefactoringKind.MOVE_FIELD


def _invoice():
    return ClassEntity(
        id="Invoice",
        fields=(FieldEntity("self", "total"), FieldEntity("self", "currency")),
        methods=tuple(
            MethodEntity("self", n) for n in ("render", "print", "tax", "discount")
        ),
    )


class TestDivergentChange:
    def test_no_history_no_findings(self):
        assert _detect(DivergentChangeDetector(), ProgramModel([_invoice()])).findings == []

    def test_independent_method_clusters(self):
        program = ProgramModel(
            [_invoice()],
            _changes(
                {"Invoice.render", "Invoice.print"},
                {"Invoice.render"},
                {"Invoice.tax", "Invoice.discount"},
                {"Invoice.tax"},
            ),
        )
        finding = _detect(DivergentChangeDetector(), program).findings[0]
        assert finding.primary == "Invoice"
        assert finding.evidence_value("change_clusters") == 2
        assert finding.evidence_value("method_only_clusters") == 2
        assert RefactoringSuggester().suggest(finding).kind is RefactoringKind.SPLIT_PHASE

    def test_mixed_clusters_suggest_extract_class(self):
        program = ProgramModel(
            [_invoice()],
            _changes(
                {"Invoice.render", "Invoice.print"},
                {"Invoice.render"},
                {"Invoice.tax", "Invoice.total"},
                {"Invoice.total"},
            ),
        )
        finding = _detect(DivergentChangeDetector(), program).findings[0]
        assert finding.evidence_value("method_only_clusters") == 1
        assert RefactoringSuggester().suggest(finding).kind is RefactoringKind.EXTRACT_CLASS

    def test_method_edited_for_every_reason(self):
        program = ProgramModel(
            [_invoice()],
            _changes(
                {"Invoice.render", "Invoice.print"},
                {"Invoice.render", "Invoice.print"},
                {"Invoice.render", "Invoice.tax"},
                {"Invoice.render", "Invoice.tax"},
            ),
        )
        finding = _detect(DivergentChangeDetector(), program).findings[0]
        assert finding.evidence_value("mixing_method") == "render"
        assert finding.evidence_value("change_clusters") == 2
        plan = RefactoringSuggester().suggest(finding)
        assert plan.kind is RefactoringKind.EXTRACT_FUNCTION
        assert plan.target_class == "Invoice"

    def test_one_reason_for_change(self):
        program = ProgramModel(
            [_invoice()],
            _changes({"Invoice.render", "Invoice.tax"}, {"Invoice.tax"}, {"Invoice.render"}),
        )
        assert _detect(DivergentChangeDetector(), program).findings == []

    def test_clusters_need_repeated_changes(self):
        program = ProgramModel(
            [_invoice()],
            _changes({"Invoice.render"}, {"Invoice.tax"}),
        )
        assert _detect(DivergentChangeDetector(), program).findings == []
