from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field

from .rules import FieldRule, FlowRules, ITEM_CONFIRMED_RE
from .utils import normalize_reply
from .validate import (
    looks_like_placeholder,
    normalize_amount,
    normalize_date_iso,
    normalize_digits,
    normalize_percent,
    normalize_text,
)

logger = logging.getLogger(__name__)

_CURRENCY_RE = re.compile(r"\brp\b", re.IGNORECASE)

@dataclass
class MineResult:
    header: dict[str, str] = field(default_factory=dict)
    auxiliary: dict[str, str] = field(default_factory=dict)
    item: dict[str, str] | None = None
    item_confirmed: bool = False
    confirmed_ordinal: int | None = None
    completion: bool = False
    reasons: list[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.header or self.auxiliary or self.item or self.item_confirmed or self.completion)

def coerce_value(rule: FieldRule, raw: str) -> str | None:
    if looks_like_placeholder(raw):
        return None
    if rule.shape == "text":
        return normalize_text(raw)
    if rule.shape in ("digits", "days"):
        return normalize_digits(raw)
    if rule.shape == "amount":
        # amounts are only trusted with a currency marker
        if not _CURRENCY_RE.search(raw):
            return None
        return normalize_amount(raw)
    if rule.shape == "percent":
        return normalize_percent(raw)
    if rule.shape == "date":
        return normalize_date_iso(raw)
    return None

def _apply_rule(rule: FieldRule, text: str, reasons: list[str]) -> str | None:
    raw = rule.search(text)
    if raw is None:
        return None
    val = coerce_value(rule, raw)
    if val is None:
        reasons.append(f"{rule.field}_suppressed")
        logger.debug("rule %s matched %r but value was suppressed", rule.field, raw)
        return None
    reasons.append(f"{rule.field}_label_match")
    return val

def mine(text: str, rules: FlowRules, normalized: bool = False) -> MineResult:
    """
    Run one flow's rule table over a single reply.

    Every rule fires at most once (first match). Line-item fields are
    all-or-nothing: if any label of the group is missing or suppressed the
    whole group is dropped for this reply.
    """
    body = text if normalized else normalize_reply(text)
    res = MineResult()
    if not body:
        return res

    for rule in rules.header:
        val = _apply_rule(rule, body, res.reasons)
        if val is not None:
            res.header[rule.field] = val

    for rule in rules.auxiliary:
        val = _apply_rule(rule, body, res.reasons)
        if val is not None:
            res.auxiliary[rule.field] = val

    item: dict[str, str] = {}
    for rule in rules.item_group:
        val = _apply_rule(rule, body, res.reasons)
        if val is not None:
            item[rule.field] = val
    if len(item) == len(rules.item_group):
        res.item = item
    elif item:
        res.reasons.append("item_group_incomplete")
        logger.debug("partial line-item group ignored: %s", sorted(item))

    m = ITEM_CONFIRMED_RE.search(body)
    if m:
        res.item_confirmed = True
        res.confirmed_ordinal = int(m.group(1)) if m.group(1) else None
        res.reasons.append("item_confirmed_marker")

    if rules.is_completion(body):
        res.completion = True
        res.reasons.append("completion_marker")

    return res
