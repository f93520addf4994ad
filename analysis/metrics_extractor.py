"""
METRICS EXTRACTOR

Picks the dominant pool (highest liquidity) and derives the metrics the
threshold scorer works on.
"""
from typing import Sequence, Tuple

from .exceptions import NoDataError
from .models import PoolSnapshot, MainPoolMetrics


class MetricsExtractor:

    def select_main_pool(self, pools: Sequence[PoolSnapshot]) -> PoolSnapshot:
        """
        Highest-liquidity pool. sorted() is stable, so ties keep input order
        and the first-seen pool wins.

        Raises:
            NoDataError: pools is empty
        """
        if not pools:
            raise NoDataError("No pool data available")

        ranked = sorted(pools, key=lambda p: p.liquidity_usd or 0, reverse=True)
        return ranked[0]

    def extract(self, pools: Sequence[PoolSnapshot]) -> Tuple[PoolSnapshot, MainPoolMetrics]:
        main_pool = self.select_main_pool(pools)
        metrics = MainPoolMetrics(
            price_change_percent=main_pool.price_change_h24 or 0,
            volume_change=main_pool.volume_h24 or 0,
            liquidity_change=main_pool.liquidity_usd or 0,
        )
        return main_pool, metrics
