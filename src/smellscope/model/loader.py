"""JSON form of the program model.

This is the adapter boundary: a language front-end emits this document and
smellscope reads it. Keys mirror the entity attribute names::

    {
      "classes": [
        {
          "id": "Person",
          "superclass": null,
          "fields": [{"name": "department", "type_tag": "reference"}],
          "methods": [
            {
              "name": "getDepartment",
              "statement_count": 1,
              "accesses": [{"target": "department", "owner": "self", "kind": "read"}]
            }
          ]
        }
      ],
      "change_sets": [{"id": "c1", "touched": ["Person.department"]}]
    }
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Optional, TypeVar

from ..exceptions import ModelLoadError
from .entities import (
    SELF,
    AccessEntity,
    AccessKind,
    ChangeSet,
    ClassEntity,
    FieldEntity,
    MethodEntity,
    ParameterEntity,
    Receiver,
    SwitchEntity,
    TypeTag,
    Visibility,
)
from .program import ProgramModel

E = TypeVar("E", bound=Enum)


def load_program(path: Path) -> ProgramModel:
    """Read a program model from a JSON file.

    Raises:
        ModelLoadError: If the file is unreadable or malformed
        ModelIntegrityError: If the decoded model is inconsistent
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ModelLoadError(f"cannot read file: {e}", source=path)
    except UnicodeDecodeError as e:
        raise ModelLoadError(f"not UTF-8 text: {e}", source=path)
    except json.JSONDecodeError as e:
        raise ModelLoadError(f"invalid JSON: {e}", source=path)

    try:
        return program_from_dict(data)
    except ModelLoadError as e:
        raise ModelLoadError(e.reason, source=path)


def program_from_dict(data: Any) -> ProgramModel:
    """Build a ProgramModel from its decoded JSON form."""
    if not isinstance(data, dict) or not isinstance(data.get("classes"), list):
        raise ModelLoadError("expected an object with a 'classes' list")

    classes = [_class_from_dict(item) for item in data["classes"]]
    change_sets = [
        ChangeSet(
            id=str(_required(item, "id", "change set")),
            touched=frozenset(item.get("touched", [])),
        )
        for item in data.get("change_sets", [])
    ]
    return ProgramModel(classes, change_sets)


def program_to_dict(program: ProgramModel) -> dict[str, Any]:
    """Serialize a ProgramModel back to its JSON form."""
    return {
        "classes": [_class_to_dict(cls) for cls in program],
        "change_sets": [
            {"id": change.id, "touched": sorted(change.touched)}
            for change in program.change_sets
        ],
    }


# ── Decoding ──────────────────────────────────────────────────────────


def _class_from_dict(item: dict[str, Any]) -> ClassEntity:
    class_id = str(_required(item, "id", "class"))
    fields = tuple(
        FieldEntity(
            owner=class_id,
            name=str(_required(f, "name", f"field of {class_id}")),
            type_tag=_enum(TypeTag, f.get("type_tag", "primitive"), "type_tag"),
            visibility=_enum(Visibility, f.get("visibility", "private"), "visibility"),
            type_name=f.get("type_name"),
        )
        for f in item.get("fields", [])
    )
    methods = tuple(_method_from_dict(class_id, m) for m in item.get("methods", []))
    return ClassEntity(
        id=class_id,
        fields=fields,
        methods=methods,
        superclass=item.get("superclass"),
        is_abstract=bool(item.get("is_abstract", False)),
        is_test=bool(item.get("is_test", False)),
    )


def _method_from_dict(class_id: str, item: dict[str, Any]) -> MethodEntity:
    name = str(_required(item, "name", f"method of {class_id}"))
    parameters = tuple(
        ParameterEntity(
            name=str(_required(p, "name", f"parameter of {class_id}.{name}")),
            type_tag=_enum(TypeTag, p.get("type_tag", "primitive"), "type_tag"),
            position=_int(p.get("position", index), "position"),
            optional=bool(p.get("optional", False)),
        )
        for index, p in enumerate(item.get("parameters", []))
    )
    accesses = tuple(
        AccessEntity(
            target=str(_required(a, "target", f"access in {class_id}.{name}")),
            owner=str(a.get("owner", SELF)),
            kind=_enum(AccessKind, a.get("kind", "read"), "kind"),
            returns=a.get("returns"),
            receiver=_enum(Receiver, a.get("receiver", "local"), "receiver"),
        )
        for a in item.get("accesses", [])
    )
    switches = tuple(
        SwitchEntity(
            discriminant=str(_required(s, "discriminant", f"switch in {class_id}.{name}")),
            owner=str(s.get("owner", SELF)),
            labels=tuple(str(label) for label in s.get("labels", [])),
        )
        for s in item.get("switches", [])
    )
    return_tag = item.get("return_tag")
    return MethodEntity(
        owner=class_id,
        name=name,
        parameters=parameters,
        accesses=accesses,
        statement_count=_int(item.get("statement_count", 0), "statement_count"),
        branch_count=_int(item.get("branch_count", 0), "branch_count"),
        visibility=_enum(Visibility, item.get("visibility", "public"), "visibility"),
        is_abstract=bool(item.get("is_abstract", False)),
        return_tag=_enum(TypeTag, return_tag, "return_tag") if return_tag else None,
        switches=switches,
        effects=frozenset(item.get("effects", [])),
        fingerprint=item.get("fingerprint"),
        comment_lines=_int(item.get("comment_lines", 0), "comment_lines"),
    )


def _required(item: Any, key: str, what: str) -> Any:
    if not isinstance(item, dict) or key not in item:
        raise ModelLoadError(f"{what} is missing '{key}'")
    return item[key]


def _int(value: Any, key: str) -> int:
    """Non-negative integer count or position; JSON booleans are rejected."""
    if not isinstance(value, bool):
        try:
            number = int(value)
        except (TypeError, ValueError):
            pass
        else:
            if number >= 0:
                return number
    raise ModelLoadError(f"invalid {key} {value!r} (expected a non-negative integer)")


def _enum(enum_cls: type[E], value: Any, key: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ModelLoadError(f"invalid {key} '{value}' (expected one of: {allowed})")


# ── Encoding ──────────────────────────────────────────────────────────


def _class_to_dict(cls: ClassEntity) -> dict[str, Any]:
    return {
        "id": cls.id,
        "superclass": cls.superclass,
        "is_abstract": cls.is_abstract,
        "is_test": cls.is_test,
        "fields": [
            {
                "name": f.name,
                "type_tag": f.type_tag.value,
                "visibility": f.visibility.value,
                "type_name": f.type_name,
            }
            for f in cls.fields
        ],
        "methods": [_method_to_dict(m) for m in cls.methods],
    }


def _method_to_dict(method: MethodEntity) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": method.name,
        "visibility": method.visibility.value,
        "is_abstract": method.is_abstract,
        "statement_count": method.statement_count,
        "branch_count": method.branch_count,
        "return_tag": _value(method.return_tag),
        "parameters": [
            {
                "name": p.name,
                "type_tag": p.type_tag.value,
                "position": p.position,
                "optional": p.optional,
            }
            for p in method.parameters
        ],
        "accesses": [
            {
                "target": a.target,
                "owner": a.owner,
                "kind": a.kind.value,
                "returns": a.returns,
                "receiver": a.receiver.value,
            }
            for a in method.accesses
        ],
        "switches": [
            {"discriminant": s.discriminant, "owner": s.owner, "labels": list(s.labels)}
            for s in method.switches
        ],
        "effects": sorted(method.effects),
    }
    if method.fingerprint is not None:
        data["fingerprint"] = method.fingerprint
    if method.comment_lines:
        data["comment_lines"] = method.comment_lines
    return data


def _value(member: Optional[Enum]) -> Optional[str]:
    return member.value if member is not None else None
