"""Core search engine functionality."""

from .distance import damerau_levenshtein, levenshtein
from .engine import SearchEngine
from .fuzzy_matcher import FuzzyMatcher
from .matchers import ExactMatcher, IndexMatcher, PrefixMatcher, Tier
from .merger import ResultAccumulator, paginate
from .normalizer import NormalizedQuery, QueryNormalizer
from .preview import truncate_preview

__all__ = [
    "SearchEngine",
    "ExactMatcher",
    "PrefixMatcher",
    "IndexMatcher",
    "FuzzyMatcher",
    "Tier",
    "QueryNormalizer",
    "NormalizedQuery",
    "ResultAccumulator",
    "paginate",
    "levenshtein",
    "damerau_levenshtein",
    "truncate_preview",
]
