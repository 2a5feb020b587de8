"""Configuration loading and management for smellscope.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig / DetectionThresholds)
    2. Global config (~/.smellscope.toml)
    3. Project config (./smellscope.toml)
    4. Explicit config file
    5. Environment variables (SMELLSCOPE_* prefix)
    6. Overrides (passed as kwargs, typically from CLI flags)

Example:
    >>> config = load_config(max_findings=20)
    >>> config.max_findings
    20
    >>> config.thresholds.large_class_field_threshold
    10
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class DetectionThresholds:
    """Detector thresholds.

    The first seven fields are the engine's documented options; the rest
    tune the supplementary checks.

    Attributes:
        large_class_field_threshold: Large Class when field count exceeds this
        large_class_statement_threshold: Large Class when statement count exceeds this
        feature_envy_ratio: Feature Envy when external access ratio exceeds this
        long_parameter_list_threshold: Long Parameter List when parameter count exceeds this
        message_chain_min_depth: Message Chains when chain depth reaches this
        data_clump_min_group_size: Smallest parameter group considered a clump
        data_clump_min_recurrence: Signatures a group must recur in
        message_chain_escalation_sites: Chains through one intermediate that escalate severity
        intimacy_min_accesses: Non-public accesses required in each direction
        refused_bequest_ratio: Refused Bequest when inherited usage ratio is below this
        alternative_similarity_threshold: Signature similarity for Alternative Classes
        lazy_class_max_methods: Behavioral methods a lazy class may have
        lazy_class_max_statements: Statements a lazy class may have
        shotgun_min_classes: Classes one change set must touch
        shotgun_min_recurrence: Change sets the same class group must recur in
        divergent_min_changes: Change sets each member cluster must appear in
        long_method_statement_threshold: Long Method when statements exceed this
        long_method_branch_threshold: Long Method when branches exceed this
        primitive_obsession_min_group: Primitive fields sharing a prefix
        temporary_field_usage_ratio: Temporary Field when usage ratio is below this
        comments_min_lines: Comment lines a method body needs before Comments applies
        comments_ratio: Comments when comment lines exceed this share of the body
    """

    large_class_field_threshold: int = 10
    large_class_statement_threshold: int = 200
    feature_envy_ratio: float = 0.5
    long_parameter_list_threshold: int = 4
    message_chain_min_depth: int = 2
    data_clump_min_group_size: int = 3
    data_clump_min_recurrence: int = 3

    message_chain_escalation_sites: int = 3
    intimacy_min_accesses: int = 1
    refused_bequest_ratio: float = 0.3
    alternative_similarity_threshold: float = 0.6
    lazy_class_max_methods: int = 1
    lazy_class_max_statements: int = 5
    shotgun_min_classes: int = 3
    shotgun_min_recurrence: int = 2
    divergent_min_changes: int = 2
    long_method_statement_threshold: int = 30
    long_method_branch_threshold: int = 10
    primitive_obsession_min_group: int = 3
    temporary_field_usage_ratio: float = 0.3
    comments_min_lines: int = 3
    comments_ratio: float = 0.3

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        ratio_fields = [
            "feature_envy_ratio",
            "refused_bequest_ratio",
            "alternative_similarity_threshold",
            "temporary_field_usage_ratio",
            "comments_ratio",
        ]
        for field_name in ratio_fields:
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(field_name, value, "must be between 0.0 and 1.0")

        if self.message_chain_min_depth < 2:
            raise InvalidConfigError(
                "message_chain_min_depth", self.message_chain_min_depth, "must be at least 2"
            )
        if self.data_clump_min_group_size < 2:
            raise InvalidConfigError(
                "data_clump_min_group_size", self.data_clump_min_group_size, "must be at least 2"
            )

        positive_fields = [
            "large_class_field_threshold",
            "large_class_statement_threshold",
            "long_parameter_list_threshold",
            "data_clump_min_recurrence",
            "message_chain_escalation_sites",
            "intimacy_min_accesses",
            "shotgun_min_classes",
            "shotgun_min_recurrence",
            "divergent_min_changes",
            "long_method_statement_threshold",
            "long_method_branch_threshold",
            "primitive_obsession_min_group",
            "comments_min_lines",
        ]
        for field_name in positive_fields:
            value = getattr(self, field_name)
            if value < 1:
                raise InvalidConfigError(field_name, value, "must be at least 1")

        if self.lazy_class_max_methods < 0 or self.lazy_class_max_statements < 0:
            raise InvalidConfigError(
                "lazy_class_max_methods",
                self.lazy_class_max_methods,
                "lazy class limits must be non-negative",
            )


DEFAULT_THRESHOLDS = DetectionThresholds()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        workers: Thread pool size for metric collection and detectors
            (None or 1 = sequential)
        detector_timeout_seconds: Stop awaiting a detector after this many
            seconds (None = wait indefinitely)
        max_findings: Maximum findings to report
        verbosity: Logging verbosity level
        enabled_detectors: If non-empty, run only these detectors
        disabled_detectors: Detectors to skip
        thresholds: Detector thresholds (nested config)
    """

    workers: Optional[int] = None
    detector_timeout_seconds: Optional[float] = None
    max_findings: int = 200
    verbosity: Verbosity = "normal"
    enabled_detectors: tuple[str, ...] = ()
    disabled_detectors: tuple[str, ...] = ()
    thresholds: DetectionThresholds = field(default_factory=DetectionThresholds)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.detector_timeout_seconds is not None and self.detector_timeout_seconds <= 0:
            raise InvalidConfigError(
                "detector_timeout_seconds", self.detector_timeout_seconds, "must be positive"
            )
        if self.max_findings < 1:
            raise InvalidConfigError("max_findings", self.max_findings, "must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet/normal/verbose")
        overlap = set(self.enabled_detectors) & set(self.disabled_detectors)
        if overlap:
            raise InvalidConfigError(
                "disabled_detectors", sorted(overlap), "detector both enabled and disabled"
            )

    @property
    def parallel(self) -> bool:
        """Whether detectors run in a thread pool."""
        return self.workers is not None and self.workers > 1

    def detector_enabled(self, name: str) -> bool:
        """Check a detector name against the enabled/disabled lists."""
        if name in self.disabled_detectors:
            return False
        if self.enabled_detectors:
            return name in self.enabled_detectors
        return True


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). Threshold
            names are accepted at top level too.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}
    thresholds: dict[str, Any] = {}

    candidates: list[tuple[Path, bool]] = [
        (Path.home() / ".smellscope.toml", False),
        (Path.cwd() / "smellscope.toml", False),
    ]
    if config_file is not None:
        candidates.append((config_file, True))

    for path, required in candidates:
        if not path.exists():
            if required:
                raise ConfigurationError(f"Config file not found: {path}")
            continue
        try:
            data = _load_toml_file(path)
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{path}': {e}")
        section = data.pop("thresholds", None)
        if section is not None:
            if not isinstance(section, dict):
                raise ConfigurationError(f"Invalid [thresholds] section in '{path}'")
            thresholds.update(_normalize_keys(section))
        merged.update(_normalize_keys(data))

    env_config, env_thresholds = _load_env_vars()
    merged.update(env_config)
    thresholds.update(env_thresholds)

    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    threshold_names = {f.name for f in fields(DetectionThresholds)}
    for key, value in _normalize_keys(overrides).items():
        if value is None:
            continue
        if key in threshold_names:
            thresholds[key] = value
        else:
            merged[key] = value

    for key in ("enabled_detectors", "disabled_detectors"):
        if key in merged:
            merged[key] = tuple(merged[key])

    explicit = merged.pop("thresholds", None)
    try:
        if isinstance(explicit, DetectionThresholds):
            base = {f.name: getattr(explicit, f.name) for f in fields(DetectionThresholds)}
            base.update(thresholds)
            thresholds = base
        merged["thresholds"] = DetectionThresholds(**thresholds)
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Accept camelCase option names (``largeClassFieldThreshold``)."""
    return {_CAMEL_BOUNDARY.sub("_", key).lower(): value for key, value in data.items()}


def _load_env_vars() -> tuple[dict[str, Any], dict[str, Any]]:
    """Load configuration from SMELLSCOPE_* environment variables.

    Top-level fields use ``SMELLSCOPE_<FIELD>`` (e.g. SMELLSCOPE_WORKERS),
    thresholds use the same prefix with the threshold name
    (e.g. SMELLSCOPE_LARGE_CLASS_FIELD_THRESHOLD).

    Returns:
        (config_overrides, threshold_overrides)
    """
    config_values: dict[str, Any] = {}
    threshold_values: dict[str, Any] = {}

    for target, cls in ((config_values, AnalysisConfig), (threshold_values, DetectionThresholds)):
        type_hints = get_type_hints(cls)
        for field_name in cls.__dataclass_fields__:
            env_key = f"SMELLSCOPE_{field_name.upper()}"
            env_value = os.environ.get(env_key)
            if env_value is None:
                continue
            type_hint = type_hints.get(field_name)
            try:
                parsed = _parse_env_value(env_value, type_hint)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {env_key}: {e}")
            if parsed is not None:
                target[field_name] = parsed

    return config_values, threshold_values


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is tuple:
        return tuple(part.strip() for part in value.split(",") if part.strip())

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
