"""Data models for detector output: findings, plans and the run result."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class SmellKind(Enum):
    """The cataloged smells, grouped the way the catalogue groups them."""

    # Bloaters
    LARGE_CLASS = "large_class"
    LONG_METHOD = "long_method"
    LONG_PARAMETER_LIST = "long_parameter_list"
    DATA_CLUMPS = "data_clumps"
    PRIMITIVE_OBSESSION = "primitive_obsession"
    # Object-orientation abusers
    SWITCH_STATEMENTS = "switch_statements"
    TEMPORARY_FIELD = "temporary_field"
    REFUSED_BEQUEST = "refused_bequest"
    ALTERNATIVE_CLASSES = "alternative_classes"
    # Change preventers
    DIVERGENT_CHANGE = "divergent_change"
    SHOTGUN_SURGERY = "shotgun_surgery"
    # Dispensables
    DATA_CLASS = "data_class"
    LAZY_CLASS = "lazy_class"
    SPECULATIVE_GENERALITY = "speculative_generality"
    DUPLICATE_CODE = "duplicate_code"
    DEAD_CODE = "dead_code"
    COMMENTS = "comments"
    # Couplers
    FEATURE_ENVY = "feature_envy"
    INAPPROPRIATE_INTIMACY = "inappropriate_intimacy"
    MESSAGE_CHAINS = "message_chains"

    @property
    def label(self) -> str:
        if self is SmellKind.ALTERNATIVE_CLASSES:
            return "Alternative Classes with Different Interfaces"
        return self.value.replace("_", " ").title()

    @property
    def category(self) -> str:
        return _CATEGORIES[self]


_CATEGORIES = {
    SmellKind.LARGE_CLASS: "bloaters",
    SmellKind.LONG_METHOD: "bloaters",
    SmellKind.LONG_PARAMETER_LIST: "bloaters",
    SmellKind.DATA_CLUMPS: "bloaters",
    SmellKind.PRIMITIVE_OBSESSION: "bloaters",
    SmellKind.SWITCH_STATEMENTS: "object-orientation-abusers",
    SmellKind.TEMPORARY_FIELD: "object-orientation-abusers",
    SmellKind.REFUSED_BEQUEST: "object-orientation-abusers",
    SmellKind.ALTERNATIVE_CLASSES: "object-orientation-abusers",
    SmellKind.DIVERGENT_CHANGE: "change-preventers",
    SmellKind.SHOTGUN_SURGERY: "change-preventers",
    SmellKind.DATA_CLASS: "dispensables",
    SmellKind.LAZY_CLASS: "dispensables",
    SmellKind.SPECULATIVE_GENERALITY: "dispensables",
    SmellKind.DUPLICATE_CODE: "dispensables",
    SmellKind.DEAD_CODE: "dispensables",
    SmellKind.COMMENTS: "dispensables",
    SmellKind.FEATURE_ENVY: "couplers",
    SmellKind.INAPPROPRIATE_INTIMACY: "couplers",
    SmellKind.MESSAGE_CHAINS: "couplers",
}


class RefactoringKind(Enum):
    """Named refactorings the suggester can recommend."""

    HIDE_DELEGATE = "Hide Delegate"
    MOVE_FUNCTION = "Move Function"
    EXTRACT_AND_MOVE_FUNCTION = "Extract Function + Move Function"
    MOVE_FIELD = "Move Field"
    ENCAPSULATE_FIELD = "Encapsulate Field"
    EXTRACT_CLASS = "Extract Class"
    EXTRACT_SUPERCLASS = "Extract Superclass"
    EXTRACT_SUBCLASS = "Extract Subclass"
    INLINE_CLASS = "Inline Class"
    COLLAPSE_HIERARCHY = "Collapse Hierarchy"
    INTRODUCE_PARAMETER_OBJECT = "Introduce Parameter Object"
    PRESERVE_WHOLE_OBJECT = "Preserve Whole Object"
    REPLACE_CONDITIONAL_WITH_POLYMORPHISM = "Replace Conditional with Polymorphism"
    REPLACE_TYPE_CODE_WITH_SUBCLASSES = "Replace Type Code with Subclasses"
    PUSH_DOWN_MEMBER = "Push Down Method/Field"
    REPLACE_SUPERCLASS_WITH_DELEGATE = "Replace Superclass with Delegate"
    REPLACE_SUBCLASS_WITH_DELEGATE = "Replace Subclass with Delegate"
    CHANGE_FUNCTION_DECLARATION = "Change Function Declaration"
    INLINE_FUNCTION = "Inline Function"
    REMOVE_DEAD_CODE = "Remove Dead Code"
    COMBINE_FUNCTIONS_INTO_CLASS = "Combine Functions into Class"
    SPLIT_PHASE = "Split Phase"
    EXTRACT_FUNCTION = "Extract Function"
    EXTRACT_VARIABLE = "Extract Variable"
    DECOMPOSE_CONDITIONAL = "Decompose Conditional"
    REPLACE_PRIMITIVE_WITH_OBJECT = "Replace Primitive with Object"
    INTRODUCE_SPECIAL_CASE = "Introduce Special Case"
    PULL_UP_METHOD = "Pull Up Method"


EvidenceValue = Union[float, int, str]


@dataclass(frozen=True)
class Evidence:
    signal: str  # "external_access_ratio", "chain_depth", etc.
    value: EvidenceValue  # the raw value
    description: str  # "5 of 7 accesses go to Customer"


@dataclass(frozen=True)
class Finding:
    """One detected smell instance.

    Frozen and hashable: two runs over the same model compare equal as sets.
    """

    kind: SmellKind
    severity: float  # 0.0 to 1.0, monotonic in the triggering metric
    primary: str  # class or Class.method id
    secondary: tuple[str, ...] = ()  # e.g. the envied class
    rationale: str = ""
    evidence: tuple[Evidence, ...] = ()
    refactoring: Optional[RefactoringKind] = None  # set by the suggester
    ambiguous: bool = False  # several equally good targets, no auto-suggestion

    @property
    def id(self) -> str:
        """Stable identity key: kind:primary[:secondary,...]."""
        if self.secondary:
            return f"{self.kind.value}:{self.primary}:{','.join(self.secondary)}"
        return f"{self.kind.value}:{self.primary}"

    def evidence_value(
        self, signal: str, default: Optional[EvidenceValue] = None
    ) -> Optional[EvidenceValue]:
        for item in self.evidence:
            if item.signal == signal:
                return item.value
        return default


@dataclass(frozen=True)
class SkippedFinding:
    """A finding (or whole detector) that could not be evaluated."""

    detector: str
    entity: Optional[str]  # None when the whole detector failed
    reason: str


@dataclass(frozen=True)
class RefactoringPlan:
    kind: RefactoringKind
    target_class: Optional[str]
    rationale: str
    finding_id: str = ""
    suppressed: bool = False  # finding kept but judged not worth acting on


@dataclass
class AnalysisSummary:
    total_classes: int = 0
    total_methods: int = 0
    change_sets: int = 0
    detectors_run: list[str] = field(default_factory=list)
    detectors_failed: list[str] = field(default_factory=list)
    findings_by_kind: dict[str, int] = field(default_factory=dict)


@dataclass
class AnalysisResult:
    findings: list[Finding]
    plans: list[RefactoringPlan]  # plans[i] belongs to findings[i]
    skipped: list[SkippedFinding] = field(default_factory=list)
    summary: AnalysisSummary = field(default_factory=AnalysisSummary)

    def pairs(self) -> list[tuple[Finding, RefactoringPlan]]:
        return list(zip(self.findings, self.plans))

    def by_kind(self, kind: SmellKind) -> list[Finding]:
        return [f for f in self.findings if f.kind is kind]
