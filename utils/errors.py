"""
Error types raised at the analysis boundary.

Malformed raw records and empty corpora are not errors: the normalizer skips
the former and the pipeline reports the latter as an ``empty_corpus`` status.
"""


class AnalysisError(Exception):
    """Base class for contract violations in the analysis pipeline."""


class InvalidThresholdError(AnalysisError, ValueError):
    """Minimum co-occurrence frequency is not a positive integer."""


class InvalidQueryError(AnalysisError, ValueError):
    """A filter parameter (sentiment type or date) is malformed."""
