"""
INPUT VALIDATOR

First pipeline stage. Pure checks, no side effects.
"""
from typing import Dict, Optional

from config import DESCRIPTION_RULES
from .models import Candidate, RejectReason


class InputValidator:
    """Rejects candidates that cannot be identified."""

    def __init__(self, config: Dict = None):
        self.config = config or DESCRIPTION_RULES
        self.min_description_length = self.config.get('min_length', 30)
        self.description_keywords = [k.lower() for k in self.config.get('keywords', [])]

    def validate(self, candidate: Candidate) -> Optional[RejectReason]:
        """
        Returns:
            None when the candidate is usable, else RejectReason.MISSING_ADDRESS
        """
        if not candidate.token_address or not candidate.token_address.strip():
            return RejectReason.MISSING_ADDRESS
        return None

    def validate_description(self, description: Optional[str]) -> bool:
        """
        Advisory quality check on the listing description.

        A missing description counts as valid. The result is reported in
        diagnostics but never gates acceptance.
        """
        if not description:
            return True

        if len(description) < self.min_description_length:
            return False

        text = description.lower()
        return any(keyword in text for keyword in self.description_keywords)
