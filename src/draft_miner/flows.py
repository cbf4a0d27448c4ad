from __future__ import annotations
import re

from .models import FlowKind
from .utils import safe_lower

# Evaluated top to bottom; the first kind with any keyword hit wins.
# MoU before invoice before quotation, so "penawaran MoU" is an MoU.
FLOW_KEYWORDS: list[tuple[FlowKind, list[str]]] = [
    (FlowKind.MOU, [
        "mou", "m.o.u", "m o u", "emou", "em o u", "memorandum", "nota kesepahaman", "tripartit",
    ]),
    (FlowKind.INVOICE, [
        "invoice", "invois", "infois", "in voice", "faktur", "tagihan",
    ]),
    (FlowKind.QUOTATION, [
        "quotation", "quotasi", "kuotasi", "kwotasi", "qoutation", "quote", "penawaran",
    ]),
]

def _compile(keywords: list[str]) -> re.Pattern[str]:
    # substring match anchored at a word start ("mou" must not hit "amount")
    return re.compile(r"(?<![a-z0-9])(?:" + "|".join(re.escape(k) for k in keywords) + ")")

_COMPILED: list[tuple[FlowKind, re.Pattern[str]]] = [(kind, _compile(kws)) for kind, kws in FLOW_KEYWORDS]

def detect_flow(text: str) -> FlowKind:
    low = safe_lower(text)
    if not low:
        return FlowKind.NONE
    for kind, pat in _COMPILED:
        if pat.search(low):
            return kind
    return FlowKind.NONE
