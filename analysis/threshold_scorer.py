"""
THRESHOLD SCORER

Final acceptance rule. A candidate is a TIER1 winner iff:
- liquidity in [$10k, $200k] (inclusive)
- 24h volume >= $500
- 0% < |24h price change| < 2000%
- social score >= 1

Every condition is evaluated and reported, pass or fail.
"""
from typing import Dict, List

from config import CLASSIFIER_THRESHOLDS
from .models import MainPoolMetrics, CheckResult

LIQUIDITY = "liquidity"
VOLUME = "volume"
PRICE_MOVEMENT = "price_movement"
SOCIAL_SCORE = "social_score"


class ThresholdScorer:

    def __init__(self, config: Dict = None):
        self.config = config or CLASSIFIER_THRESHOLDS
        self.min_liquidity = self.config.get('min_liquidity_usd', 10000)
        self.max_liquidity = self.config.get('max_liquidity_usd', 200000)
        self.min_volume = self.config.get('min_volume_24h', 500)
        self.max_price_change = self.config.get('max_price_change_pct', 2000)
        self.min_social_score = self.config.get('min_social_score', 1)

    def evaluate(self, metrics: MainPoolMetrics, social_score: float) -> List[CheckResult]:
        liquidity = metrics.liquidity_change
        volume = metrics.volume_change
        price_change = metrics.price_change_percent
        abs_change = abs(price_change)

        return [
            CheckResult(
                name=LIQUIDITY,
                passed=self.min_liquidity <= liquidity <= self.max_liquidity,
                value=liquidity,
                requirement=f"Between ${self.min_liquidity:,} and ${self.max_liquidity:,}",
            ),
            CheckResult(
                name=VOLUME,
                passed=volume >= self.min_volume,
                value=volume,
                requirement=f">= ${self.min_volume:,}",
            ),
            CheckResult(
                name=PRICE_MOVEMENT,
                passed=0 < abs_change < self.max_price_change,
                value=price_change,
                requirement=f"Between 0% and {self.max_price_change}%",
            ),
            CheckResult(
                name=SOCIAL_SCORE,
                passed=social_score >= self.min_social_score,
                value=social_score,
                requirement=f">= {self.min_social_score}",
            ),
        ]

    @staticmethod
    def passed(checks: List[CheckResult]) -> bool:
        return bool(checks) and all(c.passed for c in checks)
