"""Per-class metrics."""

from __future__ import annotations

import re
from collections import defaultdict
from typing import TYPE_CHECKING, Union

from ..model import ClassEntity, FieldEntity, MethodEntity, TypeTag, Visibility
from .method_metrics import is_behavioral, is_constructor

if TYPE_CHECKING:
    from ..model import ProgramModel

_WORD_SPLIT = re.compile(r"_+|(?<=[a-z0-9])(?=[A-Z])")


def field_count(cls: ClassEntity) -> int:
    return len(cls.fields)


def method_count(cls: ClassEntity) -> int:
    return len(cls.methods)


def statement_count(cls: ClassEntity) -> int:
    return sum(m.statement_count for m in cls.methods)


def behavioral_methods(program: ProgramModel, cls: ClassEntity) -> list[MethodEntity]:
    return [m for m in cls.methods if is_behavioral(program, m)]


# ── Type-code switches ────────────────────────────────────────────────


def type_switch_groups(
    program: ProgramModel, cls: ClassEntity
) -> dict[str, dict[str, tuple[str, ...]]]:
    """Methods of ``cls`` switching on each of its type-code fields.

    Returns:
        {field name: {method id: case labels}}
    """
    own = program.self_owners(cls.id)
    groups: dict[str, dict[str, tuple[str, ...]]] = defaultdict(dict)
    for method in cls.methods:
        for switch in method.switches:
            if switch.owner not in own:
                continue
            resolved = program.resolve_member(switch.owner, switch.discriminant)
            if resolved is None:
                continue
            declared = resolved[1]
            if isinstance(declared, FieldEntity) and declared.type_tag is TypeTag.TYPE_CODE:
                groups[switch.discriminant].setdefault(method.id, switch.labels)
    return dict(groups)


def type_switch_count(program: ProgramModel, cls: ClassEntity) -> int:
    """Most methods switching on one type-code field of the class."""
    groups = type_switch_groups(program, cls)
    return max((len(methods) for methods in groups.values()), default=0)


# ── Inheritance ───────────────────────────────────────────────────────


def inherited_members(
    program: ProgramModel, cls: ClassEntity
) -> dict[str, Union[FieldEntity, MethodEntity]]:
    """Non-private, non-constructor members reachable from ancestors.

    The nearest declaration wins when a name appears on several ancestors.
    """
    members: dict[str, Union[FieldEntity, MethodEntity]] = {}
    for ancestor_id in program.ancestors(cls.id):
        ancestor = program.get_class(ancestor_id)
        for f in ancestor.fields:
            if f.visibility is not Visibility.PRIVATE:
                members.setdefault(f.name, f)
        for m in ancestor.methods:
            if m.visibility is not Visibility.PRIVATE and not is_constructor(m):
                members.setdefault(m.name, m)
    return members


def used_inherited_members(program: ProgramModel, cls: ClassEntity) -> set[str]:
    """Inherited member names the subclass's own methods actually reach."""
    inherited = inherited_members(program, cls)
    own = program.self_owners(cls.id)
    used: set[str] = set()
    for method in cls.methods:
        for access in method.accesses:
            if access.owner not in own or access.target not in inherited:
                continue
            resolved = program.resolve_member(access.owner, access.target)
            if resolved is not None and resolved[0] != cls.id:
                used.add(access.target)
    return used


def overridden_methods(program: ProgramModel, cls: ClassEntity) -> set[str]:
    inherited = inherited_members(program, cls)
    return {
        m.name
        for m in cls.methods
        if isinstance(inherited.get(m.name), MethodEntity)
    }


def inherited_usage_ratio(program: ProgramModel, cls: ClassEntity) -> float:
    """Share of inherited members the subclass uses (1.0 when nothing is inherited)."""
    inherited = inherited_members(program, cls)
    if not inherited:
        return 1.0
    return len(used_inherited_members(program, cls)) / len(inherited)


# ── Fields ────────────────────────────────────────────────────────────


def field_users(cls: ClassEntity, field_name: str) -> list[str]:
    """Ids of the class's methods that touch one of its fields."""
    return [
        m.id
        for m in cls.methods
        if any(a.owner == cls.id and a.target == field_name for a in m.accesses)
    ]


def field_usage_ratio(cls: ClassEntity, field_name: str) -> float:
    methods = [m for m in cls.methods if not is_constructor(m)]
    if not methods:
        return 0.0
    users = set(field_users(cls, field_name))
    return sum(1 for m in methods if m.id in users) / len(methods)


def name_prefix(name: str) -> str:
    """First word of a camelCase or snake_case identifier, lowercased."""
    words = [w for w in _WORD_SPLIT.split(name.strip("_")) if w]
    return words[0].lower() if words else name.lower()


def field_prefix_groups(names: list[str]) -> dict[str, list[str]]:
    """Group identifiers by their first word. Singletons are kept."""
    groups: dict[str, list[str]] = defaultdict(list)
    for name in names:
        groups[name_prefix(name)].append(name)
    return dict(groups)
