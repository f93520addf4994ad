"""
OFF-CHAIN DATA SOURCES

External collaborators of the classification pipeline.

Architecture:
  DexScreener (latest + boosted profiles)
          ↓
  PAIR NORMALIZER  → Candidate / PoolSnapshot
          ↓
  TOKEN ANALYZER   ← RugCheck trust reports (Solana)
          ↓
  TOKEN STORAGE
"""

from .base_screener import BaseScreener, TrustSource
from .dex_screener import DexScreenerAPI
from .rugcheck_api import RugCheckAPI
from .normalizer import PairNormalizer
from .deduplicator import Deduplicator

__all__ = [
    'BaseScreener',
    'TrustSource',
    'DexScreenerAPI',
    'RugCheckAPI',
    'PairNormalizer',
    'Deduplicator',
]
