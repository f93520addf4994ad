"""
TRUST EVALUATOR

Consults an external trust report source (RugCheck) for chains whose
policy asks for it. Chains without the flag pass through unchecked.

Policy:
- report could not be obtained  -> reject (TRUST_CHECK_FAILED)
- not acceptable                -> reject (TRUST_REJECTED)
- bundled supply                -> reject (BUNDLED_SUPPLY), always fatal
- otherwise pass, warnings carried for observability only
"""
import logging
from typing import Dict, Optional

from config import get_chain_policies
from .models import TrustReport, TrustVerdict, RejectReason

logger = logging.getLogger(__name__)


class TrustEvaluator:

    def __init__(self, trust_source, chain_policies: Optional[Dict[str, Dict]] = None):
        """
        Args:
            trust_source: object with async check_token(chain_id, token_address) -> TrustReport
            chain_policies: {chain: {requires_trust_check: bool, ...}}; defaults to chains.yaml
        """
        self.trust_source = trust_source
        policies = chain_policies if chain_policies is not None else get_chain_policies()
        self.chain_policies = {str(k).lower(): (v or {}) for k, v in policies.items()}

    def requires_trust_check(self, chain_id: str) -> bool:
        policy = self.chain_policies.get((chain_id or '').lower(), {})
        return bool(policy.get('requires_trust_check', False))

    async def fetch_report(self, chain_id: str, token_address: str) -> TrustReport:
        """Never raises: any source failure becomes the conservative default."""
        if self.trust_source is None:
            return TrustReport.failed("No trust source configured")
        try:
            report = await self.trust_source.check_token(chain_id, token_address)
        except Exception as e:
            logger.warning(f"[TRUST] Trust source error for {token_address}: {e}")
            return TrustReport.failed(str(e))

        if report is None:
            return TrustReport.failed("Trust source returned no report")
        return report

    async def evaluate(self, chain_id: str, token_address: str) -> TrustVerdict:
        if not self.requires_trust_check(chain_id):
            return TrustVerdict(required=False, passed=True)

        logger.info(f"[TRUST] Running trust check for {chain_id} token {token_address}...")
        report = await self.fetch_report(chain_id, token_address)
        return self.judge(report)

    def judge(self, report: TrustReport) -> TrustVerdict:
        if report.check_failed:
            return TrustVerdict(required=True, passed=False, report=report,
                                reject_reason=RejectReason.TRUST_CHECK_FAILED)

        if not report.is_good:
            return TrustVerdict(required=True, passed=False, report=report,
                                reject_reason=RejectReason.TRUST_REJECTED)

        if report.is_bundled:
            return TrustVerdict(required=True, passed=False, report=report,
                                reject_reason=RejectReason.BUNDLED_SUPPLY)

        return TrustVerdict(required=True, passed=True, report=report)
