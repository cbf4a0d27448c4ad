from __future__ import annotations
from dataclasses import dataclass
import os

AUXILIARY_FIELDS = ["transport_charge", "service_charge", "payment_term_days", "tax_percent"]

# Filled into emitted quotation snapshots when apply_snapshot_defaults is on
QUOTATION_SNAPSHOT_DEFAULTS = {
    "sequence_prefix": "001",
    "company_address": "",
    "transport_charge": "1200000",
    "payment_term_days": "14",
}

@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    strict_finalize: bool = True
    apply_snapshot_defaults: bool = False

    # Backend transport
    api_base_url: str = "http://localhost:5000"
    api_timeout_s: int = 90
    api_max_retries: int = 3

def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip() == "1"

def load_settings() -> Settings:
    timeout = os.getenv("CHAT_API_TIMEOUT", "90").strip()
    retries = os.getenv("CHAT_API_RETRIES", "3").strip()
    if not timeout.isdigit() or not retries.isdigit():
        raise ValueError("CHAT_API_TIMEOUT and CHAT_API_RETRIES must be non-negative integers.")

    return Settings(
        log_level=os.getenv("DRAFT_MINER_LOG_LEVEL", "INFO").strip().upper(),
        strict_finalize=_env_flag("DRAFT_MINER_STRICT_FINALIZE", "1"),
        apply_snapshot_defaults=_env_flag("DRAFT_MINER_APPLY_DEFAULTS", "0"),
        api_base_url=os.getenv("CHAT_API_URL", "http://localhost:5000").strip().rstrip("/"),
        api_timeout_s=int(timeout),
        api_max_retries=int(retries),
    )
