"""RefactoringSuggester: turns each Finding into exactly one RefactoringPlan.

Each smell kind has a rule that reads the finding's evidence and picks one
refactoring from the catalogue, plus the class the change should land in.
A finding is never dropped: a smell without a catalogue entry is a
programming error and raises UnmappedSmellError.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Callable, Optional

from ..exceptions import UnmappedSmellError
from ..findings import Finding, RefactoringKind, RefactoringPlan, SmellKind
from ..logging_config import get_logger
from .catalogue import CATALOGUE, check_catalogue

logger = get_logger(__name__)

R = RefactoringKind

# (refactoring, target class, rationale, suppressed)
Choice = tuple[RefactoringKind, Optional[str], str, bool]
Rule = Callable[[Finding], Choice]


def _owner(entity_id: str) -> str:
    """Class part of a ``Class.member`` id."""
    class_id, _, _ = entity_id.rpartition(".")
    return class_id or entity_id


def _ev(finding: Finding, signal: str, default=0):
    return finding.evidence_value(signal, default)


# ── Rules ─────────────────────────────────────────────────────────────


def _message_chains(f: Finding) -> Choice:
    target = f.secondary[0]
    return (
        R.HIDE_DELEGATE,
        target,
        f"Add a delegating method on {target} so {f.primary} stops navigating through it",
        False,
    )


def _feature_envy(f: Finding) -> Choice:
    if f.ambiguous:
        return (
            R.MOVE_FUNCTION,
            None,
            f"{f.primary} is split between {', '.join(f.secondary)}; choose its home manually",
            False,
        )
    target = f.secondary[0]
    if _ev(f, "calls_own_methods"):
        return (
            R.EXTRACT_AND_MOVE_FUNCTION,
            target,
            f"Extract the part of {f.primary} that works on {target} and move it there",
            False,
        )
    return R.MOVE_FUNCTION, target, f"Move {f.primary} to {target}", False


def _inappropriate_intimacy(f: Finding) -> Choice:
    target = _ev(f, "heavier_side", f.primary)
    forward = _ev(f, "accesses_forward")
    backward = _ev(f, "accesses_backward")
    if _ev(f, "chained_accesses") * 2 > forward + backward:
        return (
            R.HIDE_DELEGATE,
            target,
            f"{f.primary} and {f.secondary[0]} reach each other through returned objects; "
            f"hide the delegate in {target}",
            False,
        )
    if _ev(f, "field_accesses") >= _ev(f, "method_accesses"):
        return R.MOVE_FIELD, target, f"Move the shared private fields into {target}", False
    return R.MOVE_FUNCTION, target, f"Move the shared private methods into {target}", False


def _data_class(f: Finding) -> Choice:
    if _ev(f, "public_fields"):
        return R.ENCAPSULATE_FIELD, f.primary, f"Encapsulate the public fields of {f.primary}", False
    return (
        R.MOVE_FUNCTION,
        f.primary,
        f"Move the behavior that uses {f.primary}'s data into {f.primary}",
        False,
    )


def _large_class(f: Finding) -> Choice:
    suppressed = bool(_ev(f, "single_theme"))
    if _ev(f, "type_code_fields"):
        kind = R.EXTRACT_SUBCLASS
        rationale = f"Split {f.primary} into subclasses along its type code"
    else:
        kind = R.EXTRACT_CLASS
        rationale = f"Extract cohesive field groups of {f.primary} into their own classes"
    if suppressed:
        rationale += "; fields already share one theme, splitting may not pay off"
    return kind, f.primary, rationale, suppressed


def _long_parameter_list(f: Finding) -> Choice:
    owner = _owner(f.primary)
    if _ev(f, "shared_prefix") >= 2:
        return (
            R.PRESERVE_WHOLE_OBJECT,
            owner,
            f"Pass the object the related parameters of {f.primary} come from",
            False,
        )
    return (
        R.INTRODUCE_PARAMETER_OBJECT,
        owner,
        f"Group the parameters of {f.primary} into a parameter object",
        False,
    )


def _data_clumps(f: Finding) -> Choice:
    group = _ev(f, "group_size")
    holder = f.evidence_value("field_holder")
    if holder is not None:
        return (
            R.EXTRACT_CLASS,
            str(holder),
            f"Extract the {group} clumped fields of {holder} into a class and pass it instead",
            False,
        )
    return (
        R.INTRODUCE_PARAMETER_OBJECT,
        _owner(f.primary),
        f"Introduce a parameter object for the {group} parameters passed together",
        False,
    )


def _switch_statements(f: Finding) -> Choice:
    field = _ev(f, "discriminant", "")
    if _ev(f, "identical_labels"):
        return (
            R.REPLACE_TYPE_CODE_WITH_SUBCLASSES,
            f.primary,
            f"Replace type code '{field}' of {f.primary} with subclasses",
            False,
        )
    return (
        R.REPLACE_CONDITIONAL_WITH_POLYMORPHISM,
        f.primary,
        f"Move each branch on '{field}' into a polymorphic method",
        False,
    )


def _refused_bequest(f: Finding) -> Choice:
    parent = f.secondary[0]
    if _ev(f, "sibling_users"):
        return (
            R.PUSH_DOWN_MEMBER,
            parent,
            f"Push the members {f.primary} refuses down from {parent} to the siblings using them",
            False,
        )
    if _ev(f, "siblings"):
        return (
            R.REPLACE_SUBCLASS_WITH_DELEGATE,
            parent,
            f"{f.primary} is one variant among several; let {parent} hold it as a delegate",
            False,
        )
    return (
        R.REPLACE_SUPERCLASS_WITH_DELEGATE,
        f.primary,
        f"Have {f.primary} delegate to {parent} instead of inheriting from it",
        False,
    )


def _alternative_classes(f: Finding) -> Choice:
    other = f.secondary[0]
    if _ev(f, "signature_similarity") >= 1.0:
        return (
            R.CHANGE_FUNCTION_DECLARATION,
            other,
            f"Rename the methods of {other} to match {f.primary}",
            False,
        )
    return (
        R.EXTRACT_SUPERCLASS,
        f.primary,
        f"Extract a common superclass for {f.primary} and {other}",
        False,
    )


def _speculative_generality(f: Finding) -> Choice:
    if _ev(f, "scope") == "method":
        owner = _owner(f.primary)
        return R.INLINE_FUNCTION, owner, f"Inline or remove the unused hook {f.primary}", False
    if not _ev(f, "subclass_count"):
        return R.REMOVE_DEAD_CODE, f.primary, f"Remove the unused abstraction {f.primary}", False
    if _ev(f, "subclass_count") > 1:
        return (
            R.INLINE_CLASS,
            f.primary,
            f"Inline {f.primary} into each of its {_ev(f, 'subclass_count')} implementations",
            False,
        )
    return (
        R.COLLAPSE_HIERARCHY,
        f.primary,
        f"Collapse {f.primary} into its subclasses",
        False,
    )


def _lazy_class(f: Finding) -> Choice:
    if _ev(f, "in_hierarchy"):
        return R.COLLAPSE_HIERARCHY, f.primary, f"Merge {f.primary} with its relatives", False
    user = f.evidence_value("main_user")
    target = str(user) if user is not None else None
    where = f"into {target}" if target else "into its callers"
    return R.INLINE_CLASS, target, f"Inline {f.primary} {where}", False


def _shotgun_surgery(f: Finding) -> Choice:
    dominant = f.evidence_value("dominant_class")
    if dominant is None:
        return (
            R.COMBINE_FUNCTIONS_INTO_CLASS,
            None,
            "Gather the scattered logic into a single new class",
            False,
        )
    if _ev(f, "field_share") >= 0.5:
        return R.MOVE_FIELD, str(dominant), f"Move the co-changing fields into {dominant}", False
    return (
        R.MOVE_FUNCTION,
        str(dominant),
        f"Move the co-changing functions into {dominant}",
        False,
    )


def _divergent_change(f: Finding) -> Choice:
    mixer = f.evidence_value("mixing_method")
    if mixer is not None:
        return (
            R.EXTRACT_FUNCTION,
            f.primary,
            f"Split {f.primary}.{mixer} so each reason for change gets its own function",
            False,
        )
    if _ev(f, "method_only_clusters") == _ev(f, "change_clusters"):
        return (
            R.SPLIT_PHASE,
            f.primary,
            f"Split the behavior of {f.primary} into separate phases",
            False,
        )
    return (
        R.EXTRACT_CLASS,
        f.primary,
        f"Extract each independently changing part of {f.primary} into its own class",
        False,
    )


def _long_method(f: Finding) -> Choice:
    owner = _owner(f.primary)
    if _ev(f, "trigger") == "branches":
        return R.DECOMPOSE_CONDITIONAL, owner, f"Decompose the conditionals of {f.primary}", False
    return R.EXTRACT_FUNCTION, owner, f"Extract smaller functions from {f.primary}", False


def _primitive_obsession(f: Finding) -> Choice:
    prefix = _ev(f, "prefix", "")
    if _ev(f, "source") == "parameters":
        return (
            R.INTRODUCE_PARAMETER_OBJECT,
            _owner(f.primary),
            f"Pass the '{prefix}' values of {f.primary} as one object",
            False,
        )
    return (
        R.REPLACE_PRIMITIVE_WITH_OBJECT,
        f.primary,
        f"Replace the '{prefix}' primitives of {f.primary} with a value object",
        False,
    )


def _temporary_field(f: Finding) -> Choice:
    owner = _owner(f.primary)
    if _ev(f, "type_tag") == "reference":
        return (
            R.INTRODUCE_SPECIAL_CASE,
            owner,
            f"Give {f.primary} a special-case object instead of leaving it empty",
            False,
        )
    return (
        R.EXTRACT_CLASS,
        owner,
        f"Extract {f.primary} and the code using it into its own class",
        False,
    )


def _duplicate_code(f: Finding) -> Choice:
    parent = f.evidence_value("shared_superclass")
    if parent is not None:
        return R.PULL_UP_METHOD, str(parent), f"Pull the duplicated method up into {parent}", False
    if _ev(f, "class_count") == 1:
        owner = _owner(f.primary)
        return R.EXTRACT_FUNCTION, owner, f"Extract the duplicated body into one function of {owner}", False
    return R.EXTRACT_CLASS, None, "Extract the duplicated behavior into a shared class", False


def _dead_code(f: Finding) -> Choice:
    return R.REMOVE_DEAD_CODE, _owner(f.primary), f"Delete {f.primary}", False


def _comments(f: Finding) -> Choice:
    owner = _owner(f.primary)
    if _ev(f, "branch_count"):
        return (
            R.EXTRACT_VARIABLE,
            owner,
            f"Name the conditions of {f.primary} with explaining variables instead of comments",
            False,
        )
    return (
        R.EXTRACT_FUNCTION,
        owner,
        f"Turn each commented block of {f.primary} into a function named after the comment",
        False,
    )


RULES: dict[SmellKind, Rule] = {
    SmellKind.MESSAGE_CHAINS: _message_chains,
    SmellKind.FEATURE_ENVY: _feature_envy,
    SmellKind.INAPPROPRIATE_INTIMACY: _inappropriate_intimacy,
    SmellKind.DATA_CLASS: _data_class,
    SmellKind.LARGE_CLASS: _large_class,
    SmellKind.LONG_PARAMETER_LIST: _long_parameter_list,
    SmellKind.DATA_CLUMPS: _data_clumps,
    SmellKind.SWITCH_STATEMENTS: _switch_statements,
    SmellKind.REFUSED_BEQUEST: _refused_bequest,
    SmellKind.ALTERNATIVE_CLASSES: _alternative_classes,
    SmellKind.SPECULATIVE_GENERALITY: _speculative_generality,
    SmellKind.LAZY_CLASS: _lazy_class,
    SmellKind.SHOTGUN_SURGERY: _shotgun_surgery,
    SmellKind.DIVERGENT_CHANGE: _divergent_change,
    SmellKind.LONG_METHOD: _long_method,
    SmellKind.PRIMITIVE_OBSESSION: _primitive_obsession,
    SmellKind.TEMPORARY_FIELD: _temporary_field,
    SmellKind.DUPLICATE_CODE: _duplicate_code,
    SmellKind.DEAD_CODE: _dead_code,
    SmellKind.COMMENTS: _comments,
}


class RefactoringSuggester:
    """Maps findings to refactoring plans using a fixed catalogue."""

    def __init__(
        self,
        catalogue: Mapping[SmellKind, tuple[RefactoringKind, ...]] = CATALOGUE,
        rules: Mapping[SmellKind, Rule] = RULES,
    ) -> None:
        check_catalogue(catalogue)
        self._catalogue = catalogue
        self._rules = rules

    def suggest(self, finding: Finding) -> RefactoringPlan:
        """Pick the refactoring for one finding.

        Raises:
            UnmappedSmellError: If the finding's kind has no catalogue entry
                or rule, or the rule picks a refactoring outside the entry
        """
        options = self._catalogue.get(finding.kind)
        if not options:
            raise UnmappedSmellError(finding.kind.value)

        rule = self._rules.get(finding.kind)
        if rule is None:
            kind, target, rationale, suppressed = options[0], None, finding.rationale, False
        else:
            kind, target, rationale, suppressed = rule(finding)

        if kind not in options:
            raise UnmappedSmellError(f"{finding.kind.value} -> {kind.value}")

        return RefactoringPlan(
            kind=kind,
            target_class=target,
            rationale=rationale,
            finding_id=finding.id,
            suppressed=suppressed,
        )

    def suggest_all(self, findings: list[Finding]) -> list[RefactoringPlan]:
        plans = [self.suggest(f) for f in findings]
        logger.debug(f"Suggested {len(plans)} refactorings")
        return plans
