"""Domain modules for credit scrutiny."""

from .classification import ClassificationSelection
from .scoring import ScoringInputs, ScrutinyResult, score_of
from .taxonomy import TaxonomyEntry, TaxonomyRegistry
from .verdict import VerdictTier, classify_verdict

__all__ = [
    "ClassificationSelection",
    "ScoringInputs",
    "ScrutinyResult",
    "TaxonomyEntry",
    "TaxonomyRegistry",
    "VerdictTier",
    "classify_verdict",
    "score_of",
]
