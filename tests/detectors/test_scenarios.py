"""End-to-end smell scenarios: detection through to the suggested refactoring."""

import pytest

from smellscope.engine import SmellKernel
from smellscope.findings import RefactoringKind, SmellKind


def _only(result, kind):
    """The single finding of ``kind`` and its plan."""
    pairs = [(f, p) for f, p in result.pairs() if f.kind is kind]
    assert len(pairs) == 1, pairs
    return pairs[0]


class TestMessageChainScenario:
    """person.getDepartment().getManager() from a client class."""

    def test_chain_detected(self, chain_program):
        finding, _ = _only(SmellKernel().run(chain_program), SmellKind.MESSAGE_CHAINS)
        assert finding.primary == "Client.findManager"
        assert finding.evidence_value("chain_depth") == 2
        assert finding.evidence_value("intermediate") == "Person.getDepartment"

    def test_hide_delegate_on_first_hop(self, chain_program):
        finding, plan = _only(SmellKernel().run(chain_program), SmellKind.MESSAGE_CHAINS)
        assert plan.kind is RefactoringKind.HIDE_DELEGATE
        assert plan.target_class == "Person"
        assert finding.refactoring is RefactoringKind.HIDE_DELEGATE
        assert plan.finding_id == finding.id

    def test_severity_at_threshold(self, chain_program):
        finding, _ = _only(SmellKernel().run(chain_program), SmellKind.MESSAGE_CHAINS)
        assert finding.severity == pytest.approx(0.5)


class TestFeatureEnvyScenario:
    """Order.computeTotal: 5 of 7 accesses go to Customer."""

    def test_envy_detected(self, envy_program):
        finding, _ = _only(SmellKernel().run(envy_program), SmellKind.FEATURE_ENVY)
        assert finding.primary == "Order.computeTotal"
        assert finding.secondary == ("Customer",)
        assert finding.evidence_value("external_access_ratio") == pytest.approx(0.7143)
        assert not finding.ambiguous

    def test_move_function_to_customer(self, envy_program):
        _, plan = _only(SmellKernel().run(envy_program), SmellKind.FEATURE_ENVY)
        assert plan.kind is RefactoringKind.MOVE_FUNCTION
        assert plan.target_class == "Customer"


class TestSwitchScenario:
    """Employee switches on its type code in four methods."""

    def test_switch_detected(self, switch_program):
        finding, _ = _only(SmellKernel().run(switch_program), SmellKind.SWITCH_STATEMENTS)
        assert finding.primary == "Employee"
        assert finding.secondary == ("Employee.type",)
        assert finding.evidence_value("type_switch_count") == 4

    def test_replace_type_code(self, switch_program):
        _, plan = _only(SmellKernel().run(switch_program), SmellKind.SWITCH_STATEMENTS)
        assert plan.kind is RefactoringKind.REPLACE_TYPE_CODE_WITH_SUBCLASSES
        assert plan.target_class == "Employee"


class TestDataClumpScenario:
    """Address parts passed together through three signatures in two classes."""

    def test_clump_detected_once(self, clump_program):
        finding, _ = _only(SmellKernel().run(clump_program), SmellKind.DATA_CLUMPS)
        assert finding.evidence_value("group_size") == 4
        assert finding.evidence_value("recurrence") == 3
        assert finding.evidence_value("class_count") == 2
        assert set((finding.primary, *finding.secondary)) == {
            "ShippingService.ship",
            "ShippingService.quote",
            "Billing.invoice",
        }

    def test_parameter_object_suggested(self, clump_program):
        _, plan = _only(SmellKernel().run(clump_program), SmellKind.DATA_CLUMPS)
        assert plan.kind in (
            RefactoringKind.INTRODUCE_PARAMETER_OBJECT,
            RefactoringKind.EXTRACT_CLASS,
        )
        assert plan.kind is RefactoringKind.INTRODUCE_PARAMETER_OBJECT
