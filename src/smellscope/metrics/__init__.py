"""Metric collectors: pure functions of the program model."""

from .class_metrics import (
    field_count,
    field_prefix_groups,
    field_usage_ratio,
    inherited_members,
    inherited_usage_ratio,
    method_count,
    statement_count,
    type_switch_count,
    type_switch_groups,
)
from .method_metrics import (
    chain_depth,
    external_access_ratio,
    is_accessor,
    parameter_count,
)
from .program_metrics import DataClump, call_sites, clump_candidates
from .table import ClassMetrics, MethodMetrics, MetricTable

__all__ = [
    "ClassMetrics",
    "DataClump",
    "MethodMetrics",
    "MetricTable",
    "call_sites",
    "chain_depth",
    "clump_candidates",
    "external_access_ratio",
    "field_count",
    "field_prefix_groups",
    "field_usage_ratio",
    "inherited_members",
    "inherited_usage_ratio",
    "is_accessor",
    "method_count",
    "parameter_count",
    "statement_count",
    "type_switch_count",
    "type_switch_groups",
]
