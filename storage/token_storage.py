"""
Token Storage - Persistent list of interesting tokens

Features:
- JSON array file (data/interesting_tokens.json by default)
- At most one record per (address, blockchain): save is append-if-absent
- Read-check-append runs under a lock, writes are atomic (tmp + replace)
"""
import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from config import INTERESTING_TOKENS_PATH
from analysis.models import Classification

logger = logging.getLogger(__name__)


class TokenStorage:

    def __init__(self, file_path: Union[str, Path] = None):
        self.file_path = Path(file_path or INTERESTING_TOKENS_PATH)
        self._lock = threading.Lock()
        self._initialize_storage()

    def _initialize_storage(self) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists():
            self._write_tokens([])

    def save_token(self, token: Classification) -> bool:
        """
        Append token unless (address, blockchain) is already stored.

        Returns:
            True if the token was written, False if it was already present
        """
        with self._lock:
            tokens = self.get_tokens()
            if self._find(tokens, token.address, token.blockchain) is not None:
                logger.debug(f"[STORAGE] {token.blockchain}:{token.address} already stored")
                return False

            tokens.append(token.to_dict())
            self._write_tokens(tokens)
            logger.info(f"[STORAGE] Saved {token.name} ({token.blockchain}:{token.address})")
            return True

    def get_tokens(self) -> List[Dict]:
        if not self.file_path.exists():
            return []
        with open(self.file_path, "r", encoding="utf-8") as f:
            content = f.read()
        if not content.strip():
            return []
        data = json.loads(content)
        if not isinstance(data, list):
            raise ValueError(f"{self.file_path} does not hold a JSON array")
        return data

    def get_classifications(self) -> List[Classification]:
        return [Classification.from_dict(t) for t in self.get_tokens()]

    def contains(self, address: str, blockchain: str) -> bool:
        return self._find(self.get_tokens(), address, blockchain) is not None

    @staticmethod
    def _find(tokens: List[Dict], address: str, blockchain: str) -> Optional[Dict]:
        for t in tokens:
            if t.get("address") == address and t.get("blockchain") == blockchain:
                return t
        return None

    def _write_tokens(self, tokens: List[Dict]) -> None:
        tmp = self.file_path.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(tokens, f, indent=2)
        os.replace(tmp, self.file_path)
