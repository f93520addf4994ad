import os
import yaml
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# DexScreener endpoints (no API key required)
DEXSCREENER_BASE_URL = os.getenv("DEXSCREENER_BASE_URL", "https://api.dexscreener.com/latest")
DEXSCREENER_PROFILES_URL = os.getenv("DEXSCREENER_PROFILES_URL", "https://api.dexscreener.com/token-profiles/latest/v1")
DEXSCREENER_BOOSTS_URL = os.getenv("DEXSCREENER_BOOSTS_URL", "https://api.dexscreener.com/token-boosts/latest/v1")

# RugCheck (Solana trust reports)
RUGCHECK_BASE_URL = os.getenv("RUGCHECK_BASE_URL", "https://api.rugcheck.xyz/v1")

# Self-imposed pacing before every external request
REQUEST_DELAY_SECONDS = float(os.getenv("REQUEST_DELAY_SECONDS", "1.0"))

# HTTP behaviour (retries belong to the clients, never to the pipeline)
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))
HTTP_MAX_RETRIES = int(os.getenv("HTTP_MAX_RETRIES", "3"))
HTTP_RETRY_DELAY_SECONDS = float(os.getenv("HTTP_RETRY_DELAY_SECONDS", "1.0"))  # delay = attempt * this

# Accepted tokens end up here
INTERESTING_TOKENS_PATH = os.getenv(
    "INTERESTING_TOKENS_PATH",
    str(Path(__file__).parent / "data" / "interesting_tokens.json")
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Final acceptance thresholds (TIER1)
CLASSIFIER_THRESHOLDS = {
    "min_liquidity_usd": 10000,     # inclusive
    "max_liquidity_usd": 200000,    # inclusive
    "min_volume_24h": 500,          # inclusive
    "max_price_change_pct": 2000,   # |change| must stay below
    "min_social_score": 1,
}

# Suspicious activity rules (any hit rejects)
ANOMALY_RULES = {
    "min_liquidity_to_volume": 0.1,
    "few_txns_limit": 10,            # total txns below this...
    "few_txns_volume_usd": 10000,    # ...while volume above this
    "one_sided_min_txns": 10,        # only judged above this many txns
    "max_buy_ratio": 0.95,
    "min_buy_ratio": 0.05,
    "max_price_change_pct": 1000,
}

SOCIAL_SCORING = {
    "pair_bonus_types": ["twitter", "telegram"],
    "pair_bonus": 1.0,
    "icon_bonus": 0.5,
    "header_bonus": 0.5,
}

# Advisory only, never gates acceptance
DESCRIPTION_RULES = {
    "min_length": 30,
    "keywords": ["token", "crypto", "defi", "blockchain", "protocol", "platform"],
}

# Multi-chain configuration
CHAINS_CONFIG_PATH = Path(__file__).parent / "chains.yaml"

# Used when chains.yaml is missing
DEFAULT_CHAIN_POLICIES = {
    "solana": {"enabled": True, "requires_trust_check": True},
    "base": {"enabled": True, "requires_trust_check": False},
}


def load_chain_configs(path: Path = None):
    """Load chain configurations from chains.yaml"""
    path = Path(path) if path else CHAINS_CONFIG_PATH
    if path.exists():
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {"chains": {}}
    return {"chains": dict(DEFAULT_CHAIN_POLICIES)}


def get_chain_policies(configs=None):
    """Return {chain_lower: policy_dict} for every configured chain"""
    configs = configs if configs is not None else CHAIN_CONFIGS
    return {str(name).lower(): (policy or {})
            for name, policy in (configs.get('chains') or {}).items()}


def get_enabled_chains(configs=None):
    """Return list of enabled chain names"""
    return [name for name, policy in get_chain_policies(configs).items()
            if policy.get('enabled', False)]


# Load chain configs on import
CHAIN_CONFIGS = load_chain_configs()
