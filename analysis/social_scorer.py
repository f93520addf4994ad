"""
SOCIAL SCORER

Heuristic social-presence score:
- +1 per distinct link platform type
- +1 if both twitter and telegram are present
- +0.5 icon, +0.5 header
"""
from typing import Dict

from config import SOCIAL_SCORING
from .models import Candidate


class SocialScorer:

    def __init__(self, config: Dict = None):
        self.config = config or SOCIAL_SCORING
        self.pair_bonus_types = set(self.config.get('pair_bonus_types', ['twitter', 'telegram']))
        self.pair_bonus = self.config.get('pair_bonus', 1.0)
        self.icon_bonus = self.config.get('icon_bonus', 0.5)
        self.header_bonus = self.config.get('header_bonus', 0.5)

    def score(self, candidate: Candidate) -> float:
        score = 0.0

        platforms = {link.type for link in candidate.links or ()}
        score += len(platforms)

        if self.pair_bonus_types and self.pair_bonus_types.issubset(platforms):
            score += self.pair_bonus

        if candidate.has_icon:
            score += self.icon_bonus
        if candidate.has_header:
            score += self.header_bonus

        return score
