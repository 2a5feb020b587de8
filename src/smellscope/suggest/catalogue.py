"""The fixed smell -> refactoring catalogue.

Each smell maps to the refactorings that address it, the usual remedy
first. The suggester only ever picks from this table.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..exceptions import UnmappedSmellError
from ..findings import RefactoringKind as R
from ..findings import SmellKind as S

CATALOGUE: dict[S, tuple[R, ...]] = {
    # Bloaters
    S.LARGE_CLASS: (R.EXTRACT_CLASS, R.EXTRACT_SUBCLASS, R.EXTRACT_SUPERCLASS),
    S.LONG_METHOD: (R.EXTRACT_FUNCTION, R.DECOMPOSE_CONDITIONAL),
    S.LONG_PARAMETER_LIST: (R.INTRODUCE_PARAMETER_OBJECT, R.PRESERVE_WHOLE_OBJECT),
    S.DATA_CLUMPS: (R.INTRODUCE_PARAMETER_OBJECT, R.EXTRACT_CLASS),
    S.PRIMITIVE_OBSESSION: (R.REPLACE_PRIMITIVE_WITH_OBJECT, R.INTRODUCE_PARAMETER_OBJECT),
    # Object-orientation abusers
    S.SWITCH_STATEMENTS: (
        R.REPLACE_CONDITIONAL_WITH_POLYMORPHISM,
        R.REPLACE_TYPE_CODE_WITH_SUBCLASSES,
    ),
    S.TEMPORARY_FIELD: (R.EXTRACT_CLASS, R.INTRODUCE_SPECIAL_CASE),
    S.REFUSED_BEQUEST: (
        R.PUSH_DOWN_MEMBER,
        R.REPLACE_SUBCLASS_WITH_DELEGATE,
        R.REPLACE_SUPERCLASS_WITH_DELEGATE,
    ),
    S.ALTERNATIVE_CLASSES: (R.CHANGE_FUNCTION_DECLARATION, R.EXTRACT_SUPERCLASS),
    # Change preventers
    S.DIVERGENT_CHANGE: (R.EXTRACT_CLASS, R.EXTRACT_FUNCTION, R.SPLIT_PHASE),
    S.SHOTGUN_SURGERY: (R.MOVE_FUNCTION, R.MOVE_FIELD, R.COMBINE_FUNCTIONS_INTO_CLASS),
    # Dispensables
    S.DATA_CLASS: (R.MOVE_FUNCTION, R.ENCAPSULATE_FIELD),
    S.LAZY_CLASS: (R.INLINE_CLASS, R.COLLAPSE_HIERARCHY),
    S.SPECULATIVE_GENERALITY: (
        R.COLLAPSE_HIERARCHY,
        R.INLINE_FUNCTION,
        R.INLINE_CLASS,
        R.REMOVE_DEAD_CODE,
    ),
    S.DUPLICATE_CODE: (R.EXTRACT_FUNCTION, R.PULL_UP_METHOD, R.EXTRACT_CLASS),
    S.DEAD_CODE: (R.REMOVE_DEAD_CODE,),
    S.COMMENTS: (R.EXTRACT_VARIABLE, R.EXTRACT_FUNCTION),
    # Couplers
    S.FEATURE_ENVY: (R.MOVE_FUNCTION, R.EXTRACT_AND_MOVE_FUNCTION),
    S.INAPPROPRIATE_INTIMACY: (R.HIDE_DELEGATE, R.MOVE_FUNCTION, R.MOVE_FIELD),
    S.MESSAGE_CHAINS: (R.HIDE_DELEGATE,),
}


def check_catalogue(catalogue: Mapping[S, tuple[R, ...]]) -> None:
    """Every smell kind needs at least one refactoring.

    Raises:
        UnmappedSmellError: For the first smell kind without an entry
    """
    for kind in S:
        if not catalogue.get(kind):
            raise UnmappedSmellError(kind.value)


def catalogue_rows(catalogue: Mapping[S, tuple[R, ...]] = CATALOGUE) -> list[tuple[str, str, str]]:
    """(category, smell label, refactorings) rows for display."""
    return [
        (kind.category, kind.label, " | ".join(r.value for r in catalogue[kind]))
        for kind in S
        if kind in catalogue
    ]
