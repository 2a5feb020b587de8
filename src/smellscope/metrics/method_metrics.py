"""Per-method metrics.

All functions are pure: they read the immutable ProgramModel and return a
number or a small summary. Chains and accessor checks need the model for
inheritance lookups.
"""

from __future__ import annotations

import re
from collections import Counter, defaultdict
from typing import TYPE_CHECKING

from ..exceptions import MetricComputationError
from ..model import AccessEntity, AccessKind, FieldEntity, MethodEntity, Receiver

if TYPE_CHECKING:
    from ..model import ProgramModel

_ACCESSOR_NAME = re.compile(r"^(get|set|is|has)([A-Z_]|$)")
CONSTRUCTOR_NAMES = frozenset({"constructor", "__init__", "init", "<init>"})


def parameter_count(method: MethodEntity) -> int:
    return len(method.parameters)


def is_constructor(method: MethodEntity) -> bool:
    return method.name in CONSTRUCTOR_NAMES or method.name == method.owner


def external_accesses(program: ProgramModel, method: MethodEntity) -> list[AccessEntity]:
    """Accesses whose owner is neither the method's class nor an ancestor."""
    own = program.self_owners(method.owner)
    return [a for a in method.accesses if a.owner not in own]


def external_access_ratio(program: ProgramModel, method: MethodEntity) -> float:
    """Fraction of a method's accesses directed at other classes.

    Returns 0.0 for a method with no accesses.
    """
    if not method.accesses:
        return 0.0
    return len(external_accesses(program, method)) / len(method.accesses)


def envy_by_class(program: ProgramModel, method: MethodEntity) -> dict[str, tuple[int, int]]:
    """Per foreign class: (total accesses, distinct members accessed)."""
    totals: Counter[str] = Counter()
    distinct: dict[str, set[str]] = defaultdict(set)
    for access in external_accesses(program, method):
        totals[access.owner] += 1
        distinct[access.owner].add(access.target)
    return {owner: (totals[owner], len(distinct[owner])) for owner in totals}


def calls_own_methods(program: ProgramModel, method: MethodEntity) -> bool:
    own = program.self_owners(method.owner)
    return any(a.kind is AccessKind.CALL and a.owner in own for a in method.accesses)


# ── Message chains ────────────────────────────────────────────────────


def chain_runs(program: ProgramModel, method: MethodEntity) -> list[tuple[AccessEntity, ...]]:
    """Split a method's accesses into chained expressions.

    A run continues while each access's receiver is the previous access's
    result and its owner is the class the previous access returned (or an
    ancestor of it, when the member is inherited).

    Raises:
        MetricComputationError: If a chained access has nothing to chain on
    """
    runs: list[tuple[AccessEntity, ...]] = []
    current: list[AccessEntity] = []
    previous: AccessEntity | None = None

    for access in method.accesses:
        if access.receiver is Receiver.RESULT:
            if previous is None:
                raise MetricComputationError(
                    "chain_depth", method.id, f"'{access.target}' chains on nothing"
                )
            if previous.returns is None:
                raise MetricComputationError(
                    "chain_depth",
                    method.id,
                    f"'{access.target}' chains on '{previous.target}', which returns no class",
                )
            allowed = (previous.returns, *program.ancestors(previous.returns))
            if access.owner not in allowed:
                raise MetricComputationError(
                    "chain_depth",
                    method.id,
                    f"'{access.owner}.{access.target}' chained on a '{previous.returns}'",
                )
            current.append(access)
        else:
            if current:
                runs.append(tuple(current))
            current = [access]
        previous = access

    if current:
        runs.append(tuple(current))
    return runs


def hops(program: ProgramModel, method: MethodEntity, run: tuple[AccessEntity, ...]) -> list[AccessEntity]:
    """Accesses of a run that leave the method's own class."""
    own = program.self_owners(method.owner)
    return [a for a in run if a.owner not in own]


def chain_depth(program: ProgramModel, method: MethodEntity) -> int:
    """Longest chain of dependent calls into other classes.

    ``this.department.getManager()`` has depth 1; ``person.getDepartment()
    .getManager()`` has depth 2.
    """
    return max((len(hops(program, method, run)) for run in chain_runs(program, method)), default=0)


# ── Accessors ─────────────────────────────────────────────────────────


def is_accessor(program: ProgramModel, method: MethodEntity) -> bool:
    """A getter/setter: accessor-style name, no logic, touches only own fields."""
    if not _ACCESSOR_NAME.match(method.name):
        return False
    if method.has_control_flow or method.statement_count > 2:
        return False
    own = program.self_owners(method.owner)
    for access in method.accesses:
        if access.kind is AccessKind.CALL or access.owner not in own:
            return False
        resolved = program.resolve_member(access.owner, access.target)
        if resolved is None or not isinstance(resolved[1], FieldEntity):
            return False
    return True


def is_behavioral(program: ProgramModel, method: MethodEntity) -> bool:
    return not is_constructor(method) and not is_accessor(program, method)


def has_external_calls(program: ProgramModel, method: MethodEntity) -> bool:
    return any(a.kind is AccessKind.CALL for a in external_accesses(program, method))
