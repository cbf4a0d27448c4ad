from .base import FieldRule, FlowRules, ITEM_CONFIRMED_RE
from .quotation import QUOTATION_RULES
from .mou import MOU_RULES
from .invoice import INVOICE_RULES
from ..models import FlowKind

RULESETS: dict[FlowKind, FlowRules] = {
    FlowKind.QUOTATION: QUOTATION_RULES,
    FlowKind.MOU: MOU_RULES,
    FlowKind.INVOICE: INVOICE_RULES,
}

def rules_for(kind: FlowKind) -> FlowRules | None:
    return RULESETS.get(kind)

__all__ = [
    "FieldRule",
    "FlowRules",
    "ITEM_CONFIRMED_RE",
    "QUOTATION_RULES",
    "MOU_RULES",
    "INVOICE_RULES",
    "RULESETS",
    "rules_for",
]
