"""
DEXSCREENER API CLIENT

Primary listing source (FREE, no API key required).
Never poll aggressively - every request waits the pacing delay first.

Endpoints used:
- token-profiles/latest/v1  newly listed token profiles
- token-boosts/latest/v1    recently boosted tokens
- latest/dex/tokens/{addr}  every pool for a token
- latest/dex/search?q=      free text pair search
"""

import asyncio
import logging
from typing import List, Dict

import aiohttp

from config import (
    DEXSCREENER_BASE_URL,
    DEXSCREENER_PROFILES_URL,
    DEXSCREENER_BOOSTS_URL,
    get_enabled_chains,
)
from analysis.exceptions import FatalSourceError, ValidationError
from analysis.models import Candidate, PoolSnapshot
from .base_screener import BaseScreener
from .normalizer import PairNormalizer
from .deduplicator import Deduplicator

logger = logging.getLogger(__name__)


class DexScreenerAPI(BaseScreener):
    """
    DexScreener API client.
    """

    BASE_URL = DEXSCREENER_BASE_URL

    def __init__(self, config: Dict = None):
        """
        Args:
            config: Optional config dict (supported_chains, request_delay_seconds, ...)
        """
        super().__init__(config)
        chains = self.config.get('supported_chains') or get_enabled_chains()
        self.supported_chains = [c.lower() for c in chains]
        self.profiles_url = self.config.get('profiles_url', DEXSCREENER_PROFILES_URL)
        self.boosts_url = self.config.get('boosts_url', DEXSCREENER_BOOSTS_URL)
        self.normalizer = PairNormalizer()
        self.deduplicator = Deduplicator()

    async def fetch_latest_pairs(self) -> List[Candidate]:
        """
        Latest + boosted token profiles, deduplicated, supported chains only.

        Raises:
            FatalSourceError: either endpoint failed or returned a non-list
        """
        await self._pace()

        tasks = [
            asyncio.ensure_future(self._get_json(self.profiles_url)),
            asyncio.ensure_future(self._get_json(self.boosts_url)),
        ]
        try:
            latest, boosted = await asyncio.gather(*tasks)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            await self._cancel_pending(tasks)
            raise FatalSourceError(f"Error fetching latest pairs: {e}") from e
        except asyncio.CancelledError:
            await self._cancel_pending(tasks)
            raise

        if not isinstance(latest, list):
            raise FatalSourceError("No valid data returned from latest API")
        if not isinstance(boosted, list):
            raise FatalSourceError("No valid data returned from boosted API")

        candidates = []
        for raw, is_boosted in [(r, False) for r in latest] + [(r, True) for r in boosted]:
            try:
                candidates.append(self.normalizer.normalize_candidate(raw, boosted=is_boosted))
            except ValidationError as e:
                logger.warning(f"[DEXSCREENER] Skipping malformed profile: {e}")

        unique = self.deduplicator.dedupe(
            candidates,
            key=lambda c: Deduplicator.token_key(c.chain_id, c.token_address),
        )
        filtered = [c for c in unique if c.chain_id.lower() in self.supported_chains]

        logger.info(f"[DEXSCREENER] Found {len(filtered)} pairs in supported chains (including boosted)")
        return filtered

    @staticmethod
    async def _cancel_pending(tasks: List[asyncio.Future]):
        """Cancel sibling requests and collect their outcome so none is left running."""
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def fetch_token_pools(self, chain_id: str, token_address: str) -> List[PoolSnapshot]:
        """Every pool for token_address on chain_id; [] on any failure."""
        await self._pace()
        url = f"{self.BASE_URL}/dex/tokens/{token_address}"

        try:
            data = await self._get_json(url)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"[DEXSCREENER] Error fetching pairs for token {token_address}: {e}")
            return []

        if not isinstance(data, dict) or not data.get('pairs'):
            logger.info(f"[DEXSCREENER] No pairs found for token {token_address}")
            return []

        chain = (chain_id or '').lower()
        chain_pairs = [
            p for p in data['pairs']
            if isinstance(p, dict) and str(p.get('chainId', '')).lower() == chain
        ]

        logger.info(f"[DEXSCREENER] Found {len(chain_pairs)} pairs for token {token_address} on {chain_id}")
        return self.normalizer.normalize_pools(chain_pairs)

    async def search_pairs(self, query: str) -> List[Dict]:
        """Raw search results; [] on any failure."""
        await self._pace()
        try:
            data = await self._get_json(f"{self.BASE_URL}/dex/search", params={'q': query})
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"[DEXSCREENER] Error searching pairs: {e}")
            return []
        if not isinstance(data, dict):
            return []
        return data.get('pairs') or []

    def get_stats(self) -> Dict:
        stats = super().get_stats()
        stats['duplicates'] = self.deduplicator.get_stats()['duplicates']
        return stats
