"""
BASE SCREENER - Abstract base classes for off-chain data sources

Defines the interfaces the scanner consumes:
- BaseScreener: new-listing source (DexScreener)
- TrustSource:  trust report source (RugCheck)

Shared HTTP plumbing lives here: pacing delay before every request and
retry with linear backoff. The pipeline itself never retries.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Dict, Optional, Any

import aiohttp

from config import (
    REQUEST_DELAY_SECONDS,
    HTTP_TIMEOUT_SECONDS,
    HTTP_MAX_RETRIES,
    HTTP_RETRY_DELAY_SECONDS,
)
from analysis.models import Candidate, PoolSnapshot, TrustReport

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class HttpSourceMixin:
    """
    Paced, retrying JSON GET on a lazily created aiohttp session.

    Expects self.config to exist before first use.
    """

    session: Optional[aiohttp.ClientSession] = None

    def _init_http(self, config: Dict):
        self.request_delay = config.get('request_delay_seconds', REQUEST_DELAY_SECONDS)
        self.timeout_seconds = config.get('timeout_seconds', HTTP_TIMEOUT_SECONDS)
        self.max_retries = config.get('max_retries', HTTP_MAX_RETRIES)
        self.retry_delay = config.get('retry_delay_seconds', HTTP_RETRY_DELAY_SECONDS)
        self.session = config.get('session')
        self._owns_session = self.session is None
        self.last_request_time = None
        self.request_count = 0
        self.error_count = 0

    async def _ensure_session(self):
        """Ensure aiohttp session exists."""
        if self.session is None:
            self.session = aiohttp.ClientSession()
            self._owns_session = True

    async def close(self):
        """Close aiohttp session (only if we created it)."""
        if self.session and self._owns_session:
            await self.session.close()
        self.session = None

    async def _pace(self):
        """Self-imposed rate limit: fixed delay before every request."""
        if self.request_delay > 0:
            await asyncio.sleep(self.request_delay)

    def _update_rate_limit(self):
        """Update internal request tracking."""
        self.last_request_time = datetime.now()
        self.request_count += 1

    async def _get_json(self, url: str, params: Dict = None) -> Any:
        """
        GET url and decode JSON.

        Retries timeouts, connection errors and 429/5xx up to max_retries
        times, sleeping attempt * retry_delay between tries.

        Raises:
            aiohttp.ClientError / asyncio.TimeoutError once retries are exhausted
        """
        await self._ensure_session()
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        attempt = 0

        while True:
            try:
                async with self.session.get(url, params=params, timeout=timeout) as response:
                    self._update_rate_limit()
                    if response.status in RETRYABLE_STATUS and attempt < self.max_retries:
                        raise aiohttp.ClientResponseError(
                            response.request_info, response.history,
                            status=response.status, message=f"HTTP {response.status}",
                        )
                    response.raise_for_status()
                    return await response.json(content_type=None)

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                status = getattr(e, 'status', None)
                retryable = status is None or status in RETRYABLE_STATUS
                if not retryable or attempt >= self.max_retries:
                    self.error_count += 1
                    raise
                attempt += 1
                logger.debug(f"[HTTP] Retry {attempt}/{self.max_retries} for {url}: {e}")
                await asyncio.sleep(attempt * self.retry_delay)

    def get_stats(self) -> Dict:
        return {
            'request_count': self.request_count,
            'error_count': self.error_count,
            'last_request': self.last_request_time.isoformat() if self.last_request_time else None,
            'source': self.__class__.__name__,
        }


class BaseScreener(HttpSourceMixin, ABC):
    """
    Abstract base class for new-listing sources.
    """

    def __init__(self, config: Dict = None):
        """
        Args:
            config: Optional dict (request_delay_seconds, timeout_seconds,
                    max_retries, retry_delay_seconds, supported_chains, session)
        """
        self.config = config or {}
        self._init_http(self.config)

    @abstractmethod
    async def fetch_latest_pairs(self) -> List[Candidate]:
        """
        Fetch newly listed tokens.

        Raises:
            FatalSourceError: listing data absent or malformed
        """

    @abstractmethod
    async def fetch_token_pools(self, chain_id: str, token_address: str) -> List[PoolSnapshot]:
        """
        Fetch every pool for a token on one chain.

        Never raises: failures degrade to an empty list.
        """


class TrustSource(HttpSourceMixin, ABC):
    """
    Abstract base class for trust report sources.
    """

    def __init__(self, config: Dict = None):
        self.config = config or {}
        self._init_http(self.config)

    @abstractmethod
    async def check_token(self, chain_id: str, token_address: str) -> TrustReport:
        """
        Never raises: failures return TrustReport.failed(...).
        """
