"""
TOKEN ANALYZER

Runs one candidate through the classification pipeline:

  validator -> metrics extractor -> (policy) trust evaluator
            -> anomaly detector -> threshold scorer -> Classification

Each stage may short-circuit with a RejectReason. Nothing is printed here:
the returned AnalysisResult carries the verdict and the per-check
breakdown, callers decide how to present it (see reporter.py).
"""
import logging
from typing import Dict, Optional, Sequence

from .exceptions import NoDataError
from .models import (
    Candidate, PoolSnapshot, Classification, AnalysisResult,
    Reason, RejectReason, MainPoolMetrics,
)
from .validator import InputValidator
from .metrics_extractor import MetricsExtractor
from .trust_evaluator import TrustEvaluator
from .anomaly_detector import AnomalyDetector
from .social_scorer import SocialScorer
from .threshold_scorer import ThresholdScorer

logger = logging.getLogger(__name__)


class TokenAnalyzer:
    """
    Usage:
        analyzer = TokenAnalyzer(RugCheckAPI())
        result = await analyzer.analyze(candidate, pools)
        if result.accepted:
            storage.save_token(result.classification)
    """

    def __init__(self, trust_source=None, config: Dict = None, chain_policies: Dict = None):
        """
        Args:
            trust_source: async check_token(chain_id, address) -> TrustReport
            config: optional overrides {'thresholds', 'anomaly', 'social', 'description'}
            chain_policies: optional chain policy table (defaults to chains.yaml)
        """
        self.config = config or {}

        self.validator = InputValidator(self.config.get('description'))
        self.extractor = MetricsExtractor()
        self.trust_evaluator = TrustEvaluator(trust_source, chain_policies)
        self.anomaly_detector = AnomalyDetector(self.config.get('anomaly'))
        self.social_scorer = SocialScorer(self.config.get('social'))
        self.threshold_scorer = ThresholdScorer(self.config.get('thresholds'))

        self.stats = {
            'total_evaluated': 0,
            'accepted': 0,
            'rejected': {reason.value: 0 for reason in RejectReason},
        }

    async def classify(self, candidate: Candidate,
                       pools: Sequence[PoolSnapshot]) -> Optional[Classification]:
        """Verdict only: a Classification, or None when rejected."""
        result = await self.analyze(candidate, pools)
        return result.classification

    async def analyze(self, candidate: Candidate,
                      pools: Sequence[PoolSnapshot]) -> AnalysisResult:
        """Verdict plus diagnostics. Never raises for a single bad candidate."""
        self.stats['total_evaluated'] += 1
        result = AnalysisResult(candidate=candidate)

        try:
            await self._run_pipeline(candidate, pools, result)
        except Exception as e:
            logger.error(f"[ANALYZER] Error analyzing token {candidate.token_address}: {e}")
            result.classification = None
            result.reject_reason = RejectReason.ANALYSIS_ERROR
            result.error = str(e)

        if result.accepted:
            self.stats['accepted'] += 1
        elif result.reject_reason:
            self.stats['rejected'][result.reject_reason.value] += 1

        return result

    async def _run_pipeline(self, candidate: Candidate, pools: Sequence[PoolSnapshot],
                            result: AnalysisResult):
        # 1. Identity
        reject = self.validator.validate(candidate)
        if reject:
            logger.info("[ANALYZER] Skipping token - missing token address")
            result.reject_reason = reject
            return

        result.social_score = self.social_scorer.score(candidate)
        result.description_valid = self.validator.validate_description(candidate.description)

        # 2. Main pool
        try:
            main_pool, metrics = self.extractor.extract(pools)
        except NoDataError:
            logger.info(f"[ANALYZER] No pool data available for {candidate.token_address}")
            result.reject_reason = RejectReason.NO_POOL_DATA
            return
        result.main_pool = main_pool
        result.metrics = metrics

        # 3. Trust report (policy driven)
        verdict = await self.trust_evaluator.evaluate(candidate.chain_id, candidate.token_address)
        result.trust = verdict
        if not verdict.passed:
            logger.info(f"[ANALYZER] {candidate.chain_id} token {candidate.token_address} "
                        f"failed trust check ({verdict.reject_reason.value})")
            result.reject_reason = verdict.reject_reason
            return

        # 4. Suspicious activity
        flags = self.anomaly_detector.detect(main_pool)
        result.anomaly_flags = flags
        if flags:
            logger.info(f"[ANALYZER] Suspicious activity detected for "
                        f"{candidate.token_address}: {', '.join(flags)}")
            result.reject_reason = RejectReason.SUSPICIOUS_ACTIVITY
            return

        # 5. Thresholds
        result.checks = self.threshold_scorer.evaluate(metrics, result.social_score)
        if not self.threshold_scorer.passed(result.checks):
            result.reject_reason = RejectReason.THRESHOLDS_NOT_MET
            return

        result.classification = self.create_classification(
            candidate, Reason.TIER1, result.social_score, metrics
        )

    def create_classification(self, candidate: Candidate, reason: Reason,
                              social_score: float, metrics: MainPoolMetrics) -> Classification:
        return Classification(
            name=self.derive_name(candidate),
            address=candidate.token_address,
            blockchain=candidate.chain_id,
            reason=reason,
            price_change_percent=metrics.price_change_percent,
            volume_change=metrics.volume_change,
            liquidity_change=metrics.liquidity_change,
            social_score=social_score,
        )

    @staticmethod
    def derive_name(candidate: Candidate) -> str:
        """First word of the description, else the last URL segment."""
        if candidate.description:
            first_word = candidate.description.split(' ')[0]
            if first_word:
                return first_word
        if candidate.url:
            last_segment = candidate.url.split('/')[-1]
            if last_segment:
                return last_segment
        return 'Unknown Token'

    def get_stats(self) -> Dict:
        return self.stats
