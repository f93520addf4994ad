"""
PAIR NORMALIZER

Converts raw API responses (DexScreener token profiles / boosts / pairs,
RugCheck report summaries) into the typed records of analysis.models.

Every optional numeric field gets an explicit default here (0 for
liquidity/volume/price change/txns, empty tuple for warnings), so the
pipeline never sees a "possibly missing" value.
"""

from typing import Dict, List, Optional

from safe_math import safe_float, safe_int, safe_get
from analysis.exceptions import ValidationError
from analysis.models import Candidate, PoolSnapshot, SocialLink, TrustReport

# RugCheck scores grow with risk; above this the token is not acceptable
RUGCHECK_MAX_SCORE = 1000


class PairNormalizer:
    """
    Normalizes payloads from different sources into pipeline records.

    DexScreener token profile (latest / boosted):
    {
      "url": "https://dexscreener.com/solana/abc",
      "chainId": "solana",
      "tokenAddress": "abc...",
      "icon": "https://...",
      "header": "https://...",
      "description": "...",
      "links": [{"type": "twitter", "url": "..."}]
    }

    DexScreener pair:
    {
      "chainId": "solana", "dexId": "raydium", "pairAddress": "...",
      "liquidity": {"usd": 50000},
      "volume": {"h24": 1000},
      "priceChange": {"h24": 15},
      "txns": {"h24": {"buys": 10, "sells": 8}}
    }
    """

    def __init__(self, max_risk_score: float = RUGCHECK_MAX_SCORE):
        self.max_risk_score = max_risk_score

    def normalize_candidate(self, raw: Dict, boosted: bool = False) -> Candidate:
        """
        Raises:
            ValidationError: payload is not an object
        """
        if not isinstance(raw, dict):
            raise ValidationError(f"Token profile is not an object: {raw!r}")

        links = []
        for link in raw.get('links') or []:
            if not isinstance(link, dict):
                continue
            # Website links carry a label instead of a type; they share one bucket
            link_type = link.get('type') or 'website'
            links.append(SocialLink(type=str(link_type), url=str(link.get('url') or '')))

        return Candidate(
            chain_id=str(raw.get('chainId') or ''),
            token_address=str(raw.get('tokenAddress') or ''),
            url=str(raw.get('url') or ''),
            description=raw.get('description') or None,
            icon=raw.get('icon') or None,
            header=raw.get('header') or None,
            links=tuple(links),
            boosted=boosted or bool(raw.get('boosted', False)),
        )

    def normalize_pool(self, raw: Dict) -> PoolSnapshot:
        return PoolSnapshot(
            liquidity_usd=safe_float(safe_get(raw, 'liquidity', 'usd')),
            volume_h24=safe_float(safe_get(raw, 'volume', 'h24')),
            price_change_h24=safe_float(safe_get(raw, 'priceChange', 'h24')),
            buys_h24=safe_int(safe_get(raw, 'txns', 'h24', 'buys')),
            sells_h24=safe_int(safe_get(raw, 'txns', 'h24', 'sells')),
            pair_address=str(safe_get(raw, 'pairAddress', default='')),
            dex_id=str(safe_get(raw, 'dexId', default='')),
            chain_id=str(safe_get(raw, 'chainId', default='')),
        )

    def normalize_pools(self, raw_pairs: Optional[List[Dict]]) -> List[PoolSnapshot]:
        return [self.normalize_pool(p) for p in raw_pairs or [] if isinstance(p, dict)]

    def normalize_trust_report(self, raw: Dict) -> TrustReport:
        """
        RugCheck report summary -> TrustReport.

        Acceptable iff no risk is at 'danger' level and the risk score
        (default 0) does not exceed max_risk_score. 'warn' risks surface
        as warnings only.
        """
        risks = [r for r in (raw.get('risks') or []) if isinstance(r, dict)]

        danger = tuple(str(r.get('name', 'Unknown')) for r in risks if r.get('level') == 'danger')
        warnings = tuple(str(r.get('name', 'Unknown')) for r in risks if r.get('level') == 'warn')
        score = safe_float(raw.get('score'))

        return TrustReport(
            is_good=not danger and score <= self.max_risk_score,
            is_bundled=bool(raw.get('isBundled', False)),
            warnings=warnings,
            score=score,
            danger_risks=danger,
        )
