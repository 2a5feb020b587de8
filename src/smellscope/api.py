"""Public API for smellscope.

This module provides the main entry point for analysis. Users should call
analyze() instead of manually constructing configs and kernels.

Example:
    >>> from smellscope import analyze
    >>>
    >>> # From a serialized model
    >>> result = analyze("model.json")
    >>>
    >>> # With customization
    >>> result = analyze(program, max_findings=50, feature_envy_ratio=0.6)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .config import load_config
from .engine import SmellKernel
from .findings import AnalysisResult
from .logging_config import get_logger
from .model import ProgramModel, load_program, program_from_dict

logger = get_logger(__name__)


def analyze(
    program: Union[ProgramModel, dict, str, Path],
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalysisResult:
    """Detect smells in a program model and suggest refactorings.

    This is the main entry point for smellscope. It orchestrates the full
    pipeline:
    1. Load configuration (auto-discover TOML + apply overrides)
    2. Build and validate the program model
    3. Run the kernel (metrics, detectors, ranking, suggestions)

    Args:
        program: A ProgramModel, its dict form, or a path to its JSON file
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g. max_findings=50, or any
            threshold name such as large_class_field_threshold=12)

    Returns:
        AnalysisResult with ranked findings and one plan per finding

    Raises:
        ConfigurationError: If configuration is invalid
        ModelLoadError: If the model file cannot be read
        ModelIntegrityError: If the model references unknown entities
        UnmappedSmellError: If a finding has no catalogued refactoring
    """
    config = load_config(config_file=config_file, **overrides)

    if isinstance(program, ProgramModel):
        model = program
    elif isinstance(program, dict):
        model = program_from_dict(program)
    else:
        model = load_program(Path(program))

    logger.debug(f"Analyzing {len(model)} classes with {config}")
    return SmellKernel(config).run(model)
