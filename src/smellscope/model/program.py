"""ProgramModel: the validated, indexed, read-only snapshot detectors walk.

Construction is the first half of the two-phase barrier: the whole model is
normalized and checked here, and only then are metrics and detectors allowed
to run. Nothing downstream mutates it.
"""

from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Union

from ..exceptions import ModelIntegrityError
from ..logging_config import get_logger
from .entities import (
    SELF,
    AccessEntity,
    AccessKind,
    ChangeSet,
    ClassEntity,
    FieldEntity,
    MethodEntity,
    SwitchEntity,
)

logger = get_logger(__name__)

Member = Union[FieldEntity, MethodEntity]


class ProgramModel:
    """Immutable program snapshot with id-indexed lookups."""

    def __init__(
        self,
        classes: Iterable[ClassEntity],
        change_sets: Iterable[ChangeSet] = (),
    ) -> None:
        normalized: dict[str, ClassEntity] = {}
        for cls in classes:
            if cls.id in normalized:
                raise ModelIntegrityError("duplicate class id", entity=cls.id)
            normalized[cls.id] = _normalize_class(cls)

        self._classes: Mapping[str, ClassEntity] = MappingProxyType(normalized)
        self._subclasses: dict[str, tuple[str, ...]] = {}
        children: dict[str, list[str]] = {cid: [] for cid in normalized}
        for cls in normalized.values():
            if cls.superclass is not None:
                if cls.superclass not in normalized:
                    raise ModelIntegrityError(
                        f"unknown superclass '{cls.superclass}'", entity=cls.id
                    )
                children[cls.superclass].append(cls.id)
        self._subclasses = {cid: tuple(kids) for cid, kids in children.items()}

        self._ancestors: dict[str, tuple[str, ...]] = {
            cid: self._walk_ancestors(cid) for cid in normalized
        }
        self._validate_accesses()
        self._change_sets = tuple(self._filter_change_sets(change_sets))

        logger.debug(
            f"Program model built: {len(normalized)} classes, "
            f"{sum(len(c.methods) for c in normalized.values())} methods, "
            f"{len(self._change_sets)} change sets"
        )

    # ── Collection protocol ───────────────────────────────────────────

    def __iter__(self) -> Iterator[ClassEntity]:
        return iter(self._classes.values())

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, class_id: object) -> bool:
        return class_id in self._classes

    @property
    def classes(self) -> tuple[ClassEntity, ...]:
        return tuple(self._classes.values())

    @property
    def change_sets(self) -> tuple[ChangeSet, ...]:
        return self._change_sets

    def get_class(self, class_id: str) -> ClassEntity:
        try:
            return self._classes[class_id]
        except KeyError:
            raise ModelIntegrityError("unknown class id", entity=class_id) from None

    def methods(self) -> Iterator[MethodEntity]:
        for cls in self._classes.values():
            yield from cls.methods

    def get_method(self, method_id: str) -> Optional[MethodEntity]:
        class_id, _, name = method_id.rpartition(".")
        cls = self._classes.get(class_id)
        return cls.get_method(name) if cls is not None else None

    # ── Inheritance ───────────────────────────────────────────────────

    def ancestors(self, class_id: str) -> tuple[str, ...]:
        """Superclass chain, nearest first."""
        return self._ancestors.get(class_id, ())

    def subclasses(self, class_id: str) -> tuple[str, ...]:
        """Direct subclasses."""
        return self._subclasses.get(class_id, ())

    def descendants(self, class_id: str) -> tuple[str, ...]:
        result: list[str] = []
        pending = list(self.subclasses(class_id))
        while pending:
            current = pending.pop(0)
            result.append(current)
            pending.extend(self.subclasses(current))
        return tuple(result)

    def self_owners(self, class_id: str) -> frozenset[str]:
        """Owners whose members a method of ``class_id`` reaches as its own."""
        return frozenset((class_id, *self.ancestors(class_id)))

    def related_by_inheritance(self, a: str, b: str) -> bool:
        return a in self.ancestors(b) or b in self.ancestors(a)

    def resolve_member(self, class_id: str, name: str) -> Optional[tuple[str, Member]]:
        """Find a member on a class or its ancestors.

        Returns:
            (declaring class id, member) or None
        """
        for owner in (class_id, *self.ancestors(class_id)):
            cls = self._classes[owner]
            member: Optional[Member] = cls.get_field(name) or cls.get_method(name)
            if member is not None:
                return owner, member
        return None

    # ── Change history ────────────────────────────────────────────────

    def class_of(self, entity_id: str) -> Optional[str]:
        """Class id of a ``Class`` or ``Class.member`` id, if it is in the model."""
        if entity_id in self._classes:
            return entity_id
        class_id, _, _ = entity_id.rpartition(".")
        return class_id if class_id in self._classes else None

    # ── Construction helpers ──────────────────────────────────────────

    def _walk_ancestors(self, class_id: str) -> tuple[str, ...]:
        chain: list[str] = []
        seen = {class_id}
        current = self._classes[class_id].superclass
        while current is not None:
            if current in seen:
                raise ModelIntegrityError("inheritance cycle", entity=class_id)
            seen.add(current)
            chain.append(current)
            current = self._classes[current].superclass
        return tuple(chain)

    def _validate_accesses(self) -> None:
        for cls in self._classes.values():
            for method in cls.methods:
                for access in method.accesses:
                    self._check_access(method, access)
                for switch in method.switches:
                    self._check_switch(method, switch)

    def _check_access(self, method: MethodEntity, access: AccessEntity) -> None:
        if access.owner not in self._classes:
            raise ModelIntegrityError(
                f"access to unknown class '{access.owner}'", entity=method.id
            )
        resolved = self.resolve_member(access.owner, access.target)
        if resolved is None:
            raise ModelIntegrityError(
                f"access to unknown member '{access.owner}.{access.target}'", entity=method.id
            )
        if access.kind is AccessKind.CALL and not isinstance(resolved[1], MethodEntity):
            raise ModelIntegrityError(
                f"call to non-method '{access.owner}.{access.target}'", entity=method.id
            )
        if access.returns is not None and access.returns not in self._classes:
            raise ModelIntegrityError(
                f"access returns unknown class '{access.returns}'", entity=method.id
            )

    def _check_switch(self, method: MethodEntity, switch: SwitchEntity) -> None:
        if switch.owner not in self._classes:
            raise ModelIntegrityError(
                f"switch on unknown class '{switch.owner}'", entity=method.id
            )
        resolved = self.resolve_member(switch.owner, switch.discriminant)
        if resolved is None or not isinstance(resolved[1], FieldEntity):
            raise ModelIntegrityError(
                f"switch on unknown field '{switch.owner}.{switch.discriminant}'",
                entity=method.id,
            )

    def _filter_change_sets(self, change_sets: Iterable[ChangeSet]) -> Iterator[ChangeSet]:
        # History may name entities deleted since; keep only what still exists.
        for change in change_sets:
            known = frozenset(e for e in change.touched if self.class_of(e) is not None)
            dropped = len(change.touched) - len(known)
            if dropped:
                logger.debug(f"Change set {change.id}: ignored {dropped} unknown entities")
            if known:
                yield replace(change, touched=known)


def _normalize_class(cls: ClassEntity) -> ClassEntity:
    """Resolve "self" owners and back-references to the class id."""
    seen_fields: set[str] = set()
    fields: list[FieldEntity] = []
    for f in cls.fields:
        if f.owner not in (cls.id, SELF, ""):
            raise ModelIntegrityError(f"field declared with owner '{f.owner}'", entity=f.id)
        if f.name in seen_fields:
            raise ModelIntegrityError("duplicate field", entity=f"{cls.id}.{f.name}")
        seen_fields.add(f.name)
        fields.append(replace(f, owner=cls.id))

    seen_methods: set[str] = set()
    methods: list[MethodEntity] = []
    for m in cls.methods:
        if m.owner not in (cls.id, SELF, ""):
            raise ModelIntegrityError(f"method declared with owner '{m.owner}'", entity=m.id)
        if m.name in seen_methods:
            raise ModelIntegrityError("duplicate method", entity=f"{cls.id}.{m.name}")
        seen_methods.add(m.name)
        accesses = tuple(
            replace(a, owner=cls.id) if a.owner == SELF else a for a in m.accesses
        )
        switches = tuple(
            replace(s, owner=cls.id) if s.owner == SELF else s for s in m.switches
        )
        methods.append(replace(m, owner=cls.id, accesses=accesses, switches=switches))

    return replace(cls, fields=tuple(fields), methods=tuple(methods))
