"""
TOKEN CLASSIFICATION PIPELINE

Turns a listed token plus its pool snapshots into a pass/fail verdict
with a reason and a metrics snapshot.

Stages:
  InputValidator      - identity fields present
  MetricsExtractor    - main pool (highest liquidity) + metrics
  TrustEvaluator      - RugCheck report for chains that require it
  AnomalyDetector     - fake volume / one-sided trading / price spikes
  SocialScorer        - social presence score
  ThresholdScorer     - final TIER1 acceptance rule
"""

from .exceptions import (
    ScannerError,
    ValidationError,
    NoDataError,
    TrustCheckFailure,
    FatalSourceError,
)
from .models import (
    Reason,
    RejectReason,
    SocialLink,
    Candidate,
    PoolSnapshot,
    MainPoolMetrics,
    TrustReport,
    TrustVerdict,
    CheckResult,
    Classification,
    AnalysisResult,
)
from .validator import InputValidator
from .metrics_extractor import MetricsExtractor
from .trust_evaluator import TrustEvaluator
from .anomaly_detector import AnomalyDetector
from .social_scorer import SocialScorer
from .threshold_scorer import ThresholdScorer
from .token_analyzer import TokenAnalyzer

__all__ = [
    'ScannerError',
    'ValidationError',
    'NoDataError',
    'TrustCheckFailure',
    'FatalSourceError',
    'Reason',
    'RejectReason',
    'SocialLink',
    'Candidate',
    'PoolSnapshot',
    'MainPoolMetrics',
    'TrustReport',
    'TrustVerdict',
    'CheckResult',
    'Classification',
    'AnalysisResult',
    'InputValidator',
    'MetricsExtractor',
    'TrustEvaluator',
    'AnomalyDetector',
    'SocialScorer',
    'ThresholdScorer',
    'TokenAnalyzer',
]
