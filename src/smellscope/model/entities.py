"""Entity model for the program under analysis.

The model is what a source adapter produces after parsing:

    ProgramModel
        ├── ClassEntity
        │       ├── FieldEntity
        │       └── MethodEntity
        │               ├── ParameterEntity
        │               ├── AccessEntity   (edges into other classes)
        │               └── SwitchEntity
        └── ChangeSet                      (optional co-change history)

Everything is frozen. Owners are referenced by class id, never by object,
so a model round-trips through JSON without dangling pointers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

SELF = "self"


class TypeTag(Enum):
    """Declared type of a field, parameter or return value."""

    PRIMITIVE = "primitive"
    REFERENCE = "reference"
    COLLECTION = "collection"
    TYPE_CODE = "type-code"


class Visibility(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class AccessKind(Enum):
    READ = "read"
    WRITE = "write"
    CALL = "call"


class Receiver(Enum):
    """What an access is invoked on.

    RESULT means the receiver is the object returned by the access right
    before this one in the same method, i.e. ``a.b().c()``.
    """

    SELF = "self"
    LOCAL = "local"
    RESULT = "result"


@dataclass(frozen=True)
class ParameterEntity:
    name: str
    type_tag: TypeTag = TypeTag.PRIMITIVE
    position: int = 0
    optional: bool = False


@dataclass(frozen=True)
class AccessEntity:
    """One field or method touched in a method body.

    Attributes:
        target: Member name on the owner class
        owner: Class id declaring the member ("self" is resolved at build time)
        kind: read, write or call
        returns: Class id of the returned object, when it is a class in the model
        receiver: What the access is invoked on
    """

    target: str
    owner: str
    kind: AccessKind = AccessKind.READ
    returns: Optional[str] = None
    receiver: Receiver = Receiver.LOCAL


@dataclass(frozen=True)
class SwitchEntity:
    """A conditional dispatch on a field value."""

    discriminant: str
    owner: str = SELF
    labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class FieldEntity:
    owner: str
    name: str
    type_tag: TypeTag = TypeTag.PRIMITIVE
    visibility: Visibility = Visibility.PRIVATE
    type_name: Optional[str] = None

    @property
    def id(self) -> str:
        return f"{self.owner}.{self.name}"


@dataclass(frozen=True)
class MethodEntity:
    """A method and the summary of its body.

    ``statement_count`` and ``branch_count`` are approximate counts supplied
    by the adapter. ``effects`` are free-form side-effect tags,
    ``fingerprint`` a normalized body hash and ``comment_lines`` the number
    of comment lines inside the body; all three are optional.
    """

    owner: str
    name: str
    parameters: tuple[ParameterEntity, ...] = ()
    accesses: tuple[AccessEntity, ...] = ()
    statement_count: int = 0
    branch_count: int = 0
    visibility: Visibility = Visibility.PUBLIC
    is_abstract: bool = False
    return_tag: Optional[TypeTag] = None
    switches: tuple[SwitchEntity, ...] = ()
    effects: frozenset[str] = field(default_factory=frozenset)
    fingerprint: Optional[str] = None
    comment_lines: int = 0

    @property
    def id(self) -> str:
        return f"{self.owner}.{self.name}"

    @property
    def has_control_flow(self) -> bool:
        return self.branch_count > 0 or bool(self.switches)


@dataclass(frozen=True)
class ClassEntity:
    id: str
    fields: tuple[FieldEntity, ...] = ()
    methods: tuple[MethodEntity, ...] = ()
    superclass: Optional[str] = None
    is_abstract: bool = False
    is_test: bool = False

    def get_field(self, name: str) -> Optional[FieldEntity]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def get_method(self, name: str) -> Optional[MethodEntity]:
        for m in self.methods:
            if m.name == name:
                return m
        return None

    @property
    def has_control_flow(self) -> bool:
        return any(m.has_control_flow for m in self.methods)


@dataclass(frozen=True)
class ChangeSet:
    """Entities modified together in one historical change (e.g. a commit).

    ``touched`` holds class ids or ``Class.member`` ids.
    """

    id: str
    touched: frozenset[str] = field(default_factory=frozenset)

