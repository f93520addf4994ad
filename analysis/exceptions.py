"""
Scanner error taxonomy.

Per-candidate errors (ValidationError, NoDataError, TrustCheckFailure) are
caught by the analyzer and turned into a rejected AnalysisResult.
FatalSourceError is the only one allowed to end a run.
"""


class ScannerError(Exception):
    """Base class for all scanner errors."""


class ValidationError(ScannerError):
    """Candidate is missing an identity field (token address)."""


class NoDataError(ScannerError):
    """No pool snapshots available for a candidate."""


class TrustCheckFailure(ScannerError):
    """Trust report source errored or returned nothing usable."""


class FatalSourceError(ScannerError):
    """Primary listing source returned malformed or absent data."""
