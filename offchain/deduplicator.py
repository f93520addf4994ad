"""
DEDUPLICATOR

Latest profiles and boosted tokens overlap; keep the first occurrence of
every (chain, token address).
"""

from typing import Callable, Dict, Iterable, List, Tuple, TypeVar

T = TypeVar('T')


class Deduplicator:

    def __init__(self):
        self.stats = {
            'seen': 0,
            'duplicates': 0,
        }

    @staticmethod
    def token_key(chain_id: str, token_address: str) -> Tuple[str, str]:
        return (chain_id or '').lower(), token_address or ''

    def dedupe(self, items: Iterable[T], key: Callable[[T], Tuple[str, str]]) -> List[T]:
        seen = set()
        unique = []
        for item in items:
            self.stats['seen'] += 1
            k = key(item)
            if k in seen:
                self.stats['duplicates'] += 1
                continue
            seen.add(k)
            unique.append(item)
        return unique

    def get_stats(self) -> Dict:
        return self.stats
