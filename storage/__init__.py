"""
Result sink for accepted tokens.
"""
from .token_storage import TokenStorage

__all__ = ['TokenStorage']
