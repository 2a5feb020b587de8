"""Program model: the parsed, language-agnostic input to the engine."""

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
from .loader import load_program, program_from_dict, program_to_dict
from .program import ProgramModel

__all__ = [
    "SELF",
    "AccessEntity",
    "AccessKind",
    "ChangeSet",
    "ClassEntity",
    "FieldEntity",
    "MethodEntity",
    "ParameterEntity",
    "ProgramModel",
    "Receiver",
    "SwitchEntity",
    "TypeTag",
    "Visibility",
    "load_program",
    "program_from_dict",
    "program_to_dict",
]
