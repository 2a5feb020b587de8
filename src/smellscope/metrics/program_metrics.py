"""Whole-program metrics: data clumps and call-site lookup."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..model import AccessKind, MethodEntity

if TYPE_CHECKING:
    from ..model import ProgramModel


@dataclass(frozen=True)
class DataClump:
    """A parameter-name group recurring across several signatures.

    Attributes:
        key: Normalized names (case-folded, optional markers stripped)
        names: Display names in the order of the first signature
        methods: Ids of the methods whose parameters contain the group
    """

    key: frozenset[str]
    names: tuple[str, ...]
    methods: tuple[str, ...]


def normalize_parameter_name(name: str) -> str:
    """``zipCode?`` and ``?zipcode`` both become ``zipcode``."""
    return name.strip().strip("?").strip().lower()


def clump_candidates(
    program: ProgramModel, min_group_size: int = 3, min_recurrence: int = 3
) -> list[DataClump]:
    """Parameter groups of ``min_group_size``+ names shared by ``min_recurrence``+ signatures.

    Candidates are every intersection of two or more signatures with at least
    ``min_group_size`` names: pairwise intersections, closed under further
    intersection with each signature. A group is dropped when a larger group
    is carried by exactly the same methods.
    """
    signatures: list[tuple[MethodEntity, frozenset[str]]] = []
    for method in program.methods():
        names = frozenset(normalize_parameter_name(p.name) for p in method.parameters)
        if len(names) >= min_group_size:
            signatures.append((method, names))

    candidates: set[frozenset[str]] = set()
    for (_, a), (_, b) in itertools.combinations(signatures, 2):
        shared = a & b
        if len(shared) >= min_group_size:
            candidates.add(shared)

    # Three signatures can share a group no pair of them shares exactly
    frontier = list(candidates)
    while frontier:
        group = frontier.pop()
        for _, names in signatures:
            shared = group & names
            if len(shared) >= min_group_size and shared not in candidates:
                candidates.add(shared)
                frontier.append(shared)

    supported: dict[frozenset[str], tuple[MethodEntity, ...]] = {}
    for group in candidates:
        carriers = tuple(m for m, names in signatures if group <= names)
        if len(carriers) >= min_recurrence:
            supported[group] = carriers

    clumps: list[DataClump] = []
    for group, carriers in supported.items():
        carrier_ids = {m.id for m in carriers}
        subsumed = any(
            group < other and {m.id for m in other_carriers} == carrier_ids
            for other, other_carriers in supported.items()
        )
        if subsumed:
            continue
        first = carriers[0]
        names = tuple(
            p.name.strip().strip("?").strip()
            for p in sorted(first.parameters, key=lambda p: p.position)
            if normalize_parameter_name(p.name) in group
        )
        clumps.append(
            DataClump(key=group, names=names, methods=tuple(m.id for m in carriers))
        )

    return sorted(clumps, key=lambda c: (-len(c.key), sorted(c.key)))


def call_sites(
    program: ProgramModel, class_id: str, method_name: str
) -> list[tuple[str, str]]:
    """Calls to a method through its class or any subclass.

    Returns:
        List of (caller method id, caller class id)
    """
    receivers = {class_id, *program.descendants(class_id)}
    sites: list[tuple[str, str]] = []
    for cls in program:
        for method in cls.methods:
            for access in method.accesses:
                if (
                    access.kind is AccessKind.CALL
                    and access.target == method_name
                    and access.owner in receivers
                ):
                    sites.append((method.id, cls.id))
    return sites


def non_test_call_sites(
    program: ProgramModel, class_id: str, method_name: str
) -> list[tuple[str, str]]:
    return [
        (caller, owner)
        for caller, owner in call_sites(program, class_id, method_name)
        if not program.get_class(owner).is_test
    ]
