"""
RUGCHECK API CLIENT

Trust reports for Solana tokens.

Any failure (HTTP error after retries, timeout, empty payload) returns
the conservative TrustReport.failed(): not acceptable, bundled, no
warnings, check_failed=True.
"""

import asyncio
import logging
from typing import Dict

import aiohttp

from config import RUGCHECK_BASE_URL
from analysis.exceptions import TrustCheckFailure
from analysis.models import TrustReport
from .base_screener import TrustSource
from .normalizer import PairNormalizer

logger = logging.getLogger(__name__)


class RugCheckAPI(TrustSource):

    BASE_URL = RUGCHECK_BASE_URL

    def __init__(self, config: Dict = None):
        super().__init__(config)
        self.base_url = self.config.get('base_url', self.BASE_URL)
        self.normalizer = PairNormalizer(self.config.get('max_risk_score', 1000))

    async def check_token(self, chain_id: str, token_address: str) -> TrustReport:
        try:
            await self._pace()
            url = f"{self.base_url}/tokens/{token_address.strip()}/report/summary"
            data = await self._get_json(url)

            if not data or not isinstance(data, dict):
                raise TrustCheckFailure("No data returned from RugCheck")

            report = self.normalizer.normalize_trust_report(data)

            if report.danger_risks:
                logger.info(f"[RUGCHECK] {token_address}: danger risks {', '.join(report.danger_risks)}")
            logger.info(f"[RUGCHECK] {token_address}: score={report.score:g} good={report.is_good}")
            return report

        except (TrustCheckFailure, aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"[RUGCHECK] Error checking token {token_address} on RugCheck: {e}")
            return TrustReport.failed(str(e) or e.__class__.__name__)
