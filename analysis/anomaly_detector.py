"""
ANOMALY DETECTOR

Fake volume / rug pull heuristics on the main pool. Any rule hit rejects
the candidate before threshold scoring.

Rules:
- LOW_LIQUIDITY_TO_VOLUME: liquidity / volume < 0.1 (volume 0 counts as 1)
- HIGH_VOLUME_FEW_TXNS:    < 10 txns while volume > $10k
- ONE_SIDED_TRADING:       > 10 txns and buy ratio > 95% or < 5%
- EXTREME_PRICE_MOVE:      |24h change| > 1000%
"""
from typing import Dict, List

from config import ANOMALY_RULES
from safe_math import safe_div
from .models import PoolSnapshot

LOW_LIQUIDITY_TO_VOLUME = "LOW_LIQUIDITY_TO_VOLUME"
HIGH_VOLUME_FEW_TXNS = "HIGH_VOLUME_FEW_TXNS"
ONE_SIDED_TRADING = "ONE_SIDED_TRADING"
EXTREME_PRICE_MOVE = "EXTREME_PRICE_MOVE"


class AnomalyDetector:

    def __init__(self, config: Dict = None):
        self.config = config or ANOMALY_RULES

        self.min_liquidity_to_volume = self.config.get('min_liquidity_to_volume', 0.1)
        self.few_txns_limit = self.config.get('few_txns_limit', 10)
        self.few_txns_volume_usd = self.config.get('few_txns_volume_usd', 10000)
        self.one_sided_min_txns = self.config.get('one_sided_min_txns', 10)
        self.max_buy_ratio = self.config.get('max_buy_ratio', 0.95)
        self.min_buy_ratio = self.config.get('min_buy_ratio', 0.05)
        self.max_price_change_pct = self.config.get('max_price_change_pct', 1000)

    def detect(self, pool: PoolSnapshot) -> List[str]:
        """Return every rule the pool trips, in rule order."""
        flags = []

        volume = pool.volume_h24 or 0
        ratio = safe_div(pool.liquidity_usd or 0, volume or 1)
        if ratio < self.min_liquidity_to_volume:
            flags.append(LOW_LIQUIDITY_TO_VOLUME)

        total_txns = pool.total_txns_h24
        if total_txns < self.few_txns_limit and volume > self.few_txns_volume_usd:
            flags.append(HIGH_VOLUME_FEW_TXNS)

        if total_txns > self.one_sided_min_txns:
            buy_ratio = safe_div(pool.buys_h24, total_txns)
            if buy_ratio > self.max_buy_ratio or buy_ratio < self.min_buy_ratio:
                flags.append(ONE_SIDED_TRADING)

        if abs(pool.price_change_h24 or 0) > self.max_price_change_pct:
            flags.append(EXTREME_PRICE_MOVE)

        return flags

    def is_suspicious(self, pool: PoolSnapshot) -> bool:
        return bool(self.detect(pool))
