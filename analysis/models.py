"""
Typed records flowing through the classification pipeline.

Raw API payloads are mapped onto these at the boundary
(offchain/normalizer.py); inside the pipeline every optional numeric
field already carries its default.
"""
from enum import Enum
from typing import Dict, List, Optional, Tuple, Any
from dataclasses import dataclass, field
from datetime import datetime, timezone


class Reason(Enum):
    """Why a token was flagged as interesting."""
    PUMP = "PUMP"
    RUG = "RUG"
    TIER1 = "TIER1"
    CEX_LISTING = "CEX_LISTING"


class RejectReason(Enum):
    """Why a candidate was dropped."""
    MISSING_ADDRESS = "MISSING_ADDRESS"
    NO_POOL_DATA = "NO_POOL_DATA"
    TRUST_CHECK_FAILED = "TRUST_CHECK_FAILED"  # source unreachable / no data
    TRUST_REJECTED = "TRUST_REJECTED"  # danger risks or high risk score
    BUNDLED_SUPPLY = "BUNDLED_SUPPLY"
    SUSPICIOUS_ACTIVITY = "SUSPICIOUS_ACTIVITY"
    THRESHOLDS_NOT_MET = "THRESHOLDS_NOT_MET"
    ANALYSIS_ERROR = "ANALYSIS_ERROR"


@dataclass(frozen=True)
class SocialLink:
    type: str
    url: str = ""


@dataclass(frozen=True)
class Candidate:
    """A token/chain pair under evaluation."""
    chain_id: str
    token_address: str
    url: str = ""
    description: Optional[str] = None
    icon: Optional[str] = None
    header: Optional[str] = None
    links: Tuple[SocialLink, ...] = ()
    boosted: bool = False

    @property
    def has_icon(self) -> bool:
        return bool(self.icon)

    @property
    def has_header(self) -> bool:
        return bool(self.header)


@dataclass(frozen=True)
class PoolSnapshot:
    """One trading venue observation for a candidate."""
    liquidity_usd: float = 0.0
    volume_h24: float = 0.0
    price_change_h24: float = 0.0
    buys_h24: int = 0
    sells_h24: int = 0
    pair_address: str = ""
    dex_id: str = ""
    chain_id: str = ""

    @property
    def total_txns_h24(self) -> int:
        return self.buys_h24 + self.sells_h24


@dataclass(frozen=True)
class MainPoolMetrics:
    price_change_percent: float = 0.0
    volume_change: float = 0.0
    liquidity_change: float = 0.0


@dataclass(frozen=True)
class TrustReport:
    """Chain-specific trust verdict from an external report source."""
    is_good: bool
    is_bundled: bool
    warnings: Tuple[str, ...] = ()
    score: float = 0.0
    danger_risks: Tuple[str, ...] = ()
    check_failed: bool = False
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str = None) -> "TrustReport":
        """
        Conservative default used whenever the source could not be read.

        is_bundled is forced True like a confirmed bundle would be;
        check_failed tells the two causes apart.
        """
        return cls(is_good=False, is_bundled=True, warnings=(),
                   check_failed=True, error=error)


@dataclass(frozen=True)
class TrustVerdict:
    required: bool
    passed: bool
    report: Optional[TrustReport] = None
    reject_reason: Optional[RejectReason] = None

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self.report.warnings if self.report else ()


@dataclass(frozen=True)
class CheckResult:
    """One threshold condition with the live value it was judged on."""
    name: str
    passed: bool
    value: float
    requirement: str


@dataclass(frozen=True)
class Classification:
    """A candidate that passed every stage. Immutable once produced."""
    name: str
    address: str
    blockchain: str
    reason: Reason
    price_change_percent: float
    volume_change: float
    liquidity_change: float
    social_score: float
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )

    def to_dict(self) -> Dict:
        """Persisted record shape (social score lives under buyVsSellRatio)."""
        return {
            "name": self.name,
            "address": self.address,
            "blockchain": self.blockchain,
            "reason": self.reason.value,
            "metrics": {
                "priceChangePercent": self.price_change_percent,
                "volumeChange": self.volume_change,
                "liquidityChange": self.liquidity_change,
                "buyVsSellRatio": self.social_score,
            },
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Classification":
        metrics = data.get("metrics") or {}
        return cls(
            name=data.get("name", ""),
            address=data.get("address", ""),
            blockchain=data.get("blockchain", ""),
            reason=Reason(data.get("reason", Reason.TIER1.value)),
            price_change_percent=metrics.get("priceChangePercent", 0),
            volume_change=metrics.get("volumeChange", 0),
            liquidity_change=metrics.get("liquidityChange", 0),
            social_score=metrics.get("buyVsSellRatio", 0),
            timestamp=data.get("timestamp", ""),
        )


@dataclass
class AnalysisResult:
    """
    Decision plus the per-stage breakdown that explains it.

    Filled progressively by TokenAnalyzer; fields of stages that never
    ran stay at their defaults.
    """
    candidate: Candidate
    classification: Optional[Classification] = None
    reject_reason: Optional[RejectReason] = None
    main_pool: Optional[PoolSnapshot] = None
    metrics: Optional[MainPoolMetrics] = None
    trust: Optional[TrustVerdict] = None
    anomaly_flags: List[str] = field(default_factory=list)
    social_score: float = 0.0
    description_valid: bool = True
    checks: List[CheckResult] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.classification is not None

    def failed_checks(self) -> List[CheckResult]:
        return [c for c in self.checks if not c.passed]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chain": self.candidate.chain_id,
            "address": self.candidate.token_address,
            "accepted": self.accepted,
            "reject_reason": self.reject_reason.value if self.reject_reason else None,
            "social_score": self.social_score,
            "description_valid": self.description_valid,
            "anomaly_flags": list(self.anomaly_flags),
            "trust_warnings": list(self.trust.warnings) if self.trust else [],
            "trust_check_failed": bool(self.trust and self.trust.report and self.trust.report.check_failed),
            "checks": [
                {"name": c.name, "passed": c.passed, "value": c.value, "requirement": c.requirement}
                for c in self.checks
            ],
            "error": self.error,
        }
