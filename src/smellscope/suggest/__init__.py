"""Refactoring suggestions for detected smells."""

from .catalogue import CATALOGUE, catalogue_rows, check_catalogue
from .suggester import RULES, RefactoringSuggester

__all__ = [
    "CATALOGUE",
    "RULES",
    "RefactoringSuggester",
    "catalogue_rows",
    "check_catalogue",
]
