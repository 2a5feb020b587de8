"""Smell detectors: read the ProgramModel and MetricTable, produce Findings.

One detector per smell family. Registry order is the order results are
merged in, so reports are stable however the detectors were scheduled.
"""

from .alternative_classes import AlternativeClassesDetector
from .base import Detector, DetectorResult
from .comments import CommentsDetector
from .data_class import DataClassDetector
from .data_clumps import DataClumpsDetector
from .dead_code import DeadCodeDetector
from .divergent_change import DivergentChangeDetector
from .duplicate_code import DuplicateCodeDetector
from .feature_envy import FeatureEnvyDetector
from .inappropriate_intimacy import InappropriateIntimacyDetector
from .large_class import LargeClassDetector
from .lazy_class import LazyClassDetector
from .long_method import LongMethodDetector
from .long_parameter_list import LongParameterListDetector
from .message_chains import MessageChainsDetector
from .primitive_obsession import PrimitiveObsessionDetector
from .refused_bequest import RefusedBequestDetector
from .shotgun_surgery import ShotgunSurgeryDetector
from .speculative_generality import SpeculativeGeneralityDetector
from .switch_statements import SwitchStatementsDetector
from .temporary_field import TemporaryFieldDetector


def get_default_detectors() -> list[Detector]:
    """Return one instance of every detector, grouped by smell category.

    Returns detectors in merge order:
    1. Bloaters
    2. Object-orientation abusers
    3. Change preventers
    4. Dispensables
    5. Couplers
    """
    return [
        # Bloaters
        LargeClassDetector(),
        LongMethodDetector(),
        LongParameterListDetector(),
        DataClumpsDetector(),
        PrimitiveObsessionDetector(),
        # Object-orientation abusers
        SwitchStatementsDetector(),
        TemporaryFieldDetector(),
        RefusedBequestDetector(),
        AlternativeClassesDetector(),
        # Change preventers
        DivergentChangeDetector(),
        ShotgunSurgeryDetector(),
        # Dispensables
        DataClassDetector(),
        LazyClassDetector(),
        SpeculativeGeneralityDetector(),
        DuplicateCodeDetector(),
        DeadCodeDetector(),
        CommentsDetector(),
        # Couplers
        FeatureEnvyDetector(),
        InappropriateIntimacyDetector(),
        MessageChainsDetector(),
    ]


__all__ = [
    "AlternativeClassesDetector",
    "CommentsDetector",
    "DataClassDetector",
    "DataClumpsDetector",
    "DeadCodeDetector",
    "Detector",
    "DetectorResult",
    "DivergentChangeDetector",
    "DuplicateCodeDetector",
    "FeatureEnvyDetector",
    "InappropriateIntimacyDetector",
    "LargeClassDetector",
    "LazyClassDetector",
    "LongMethodDetector",
    "LongParameterListDetector",
    "MessageChainsDetector",
    "PrimitiveObsessionDetector",
    "RefusedBequestDetector",
    "ShotgunSurgeryDetector",
    "SpeculativeGeneralityDetector",
    "SwitchStatementsDetector",
    "TemporaryFieldDetector",
    "get_default_detectors",
]
