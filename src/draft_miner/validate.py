from __future__ import annotations
import re
from datetime import datetime
from dateutil import parser as dateparser

# Sentinels the assistant uses for "not known yet"
PLACEHOLDER_PHRASES = [
    "belum ditemukan", "tidak ditemukan", "belum diisi", "belum ada", "tidak diketahui",
]
_PLACEHOLDER_PAT = re.compile(r"\[[^\]]+\]")  # e.g. [Alamat]

# 1.200.000 | 1,200,000 | 15000 | 15.000,50
_AMOUNT_RE = re.compile(r"(\d{1,3}(?:\.\d{3})+|\d{1,3}(?:,\d{3})+|\d+)(?:[.,](\d{1,2}))?(?!\d)")
_DIGITS_RE = re.compile(r"\d+")
_PERCENT_RE = re.compile(r"(\d+(?:[.,]\d+)?)\s*%?")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")
# two defaults differing in every part expose what the input left out
_DATE_DEFAULTS = (datetime(1901, 1, 1), datetime(1902, 2, 2))

_ID_MONTHS = {
    "januari": "january", "februari": "february", "maret": "march", "mei": "may",
    "juni": "june", "juli": "july", "agustus": "august", "oktober": "october",
    "nopember": "november", "desember": "december",
}

def looks_like_placeholder(s: str) -> bool:
    s = s.strip()
    if not s or s == "-":
        return True
    if _PLACEHOLDER_PAT.search(s):
        return True
    low = s.lower()
    return any(p in low for p in PLACEHOLDER_PHRASES)

def normalize_amount(s: str) -> str | None:
    """'Rp 1.200.000/ritase' -> '1200000'. Zero decimals are dropped."""
    s = re.sub(r"(?i)\brp\.?", "", s).strip()
    m = _AMOUNT_RE.search(s)
    if not m:
        return None
    whole = re.sub(r"[.,]", "", m.group(1))
    dec = m.group(2)
    if dec and int(dec) != 0:
        return f"{whole}.{dec}"
    return whole

def normalize_digits(s: str) -> str | None:
    m = _DIGITS_RE.search(s)
    return m.group(0) if m else None

def normalize_percent(s: str) -> str | None:
    m = _PERCENT_RE.search(s)
    if not m:
        return None
    return m.group(1).replace(",", ".")

def normalize_text(s: str) -> str | None:
    s = re.sub(r"\s+", " ", s).strip(" \t.,;:")
    return s or None

def normalize_date_iso(s: str) -> str | None:
    raw = s.strip().lower()
    for ind, eng in _ID_MONTHS.items():
        raw = re.sub(rf"\b{ind}\b", eng, raw)
    # Indonesian dates are day-first; ISO input is year-first
    yearfirst = bool(_ISO_DATE_RE.match(raw))
    try:
        parsed = {
            dateparser.parse(raw, dayfirst=not yearfirst, yearfirst=yearfirst, default=d)
            for d in _DATE_DEFAULTS
        }
    except (ValueError, OverflowError):
        return None
    # a part filled in from the default means the date is incomplete
    if len(parsed) != 1:
        return None
    return parsed.pop().date().isoformat()
