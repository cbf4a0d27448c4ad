from __future__ import annotations
from dataclasses import dataclass
from typing import Any
from rapidfuzz import fuzz

# Free-text fields compared fuzzily; everything else must match exactly
FUZZY_FIELDS = {
    "company_name", "company_address", "first_party", "second_party", "third_party",
    "customer_name", "customer_address", "category", "description",
}

def _norm(s: str) -> str:
    return "".join(ch.lower() for ch in s.strip() if ch.isalnum() or ch.isspace())

def exact_match(pred: str, gt: str) -> bool:
    return _norm(pred) == _norm(gt)

def fuzzy_score(pred: str, gt: str) -> float:
    return fuzz.token_set_ratio(_norm(pred), _norm(gt)) / 100.0

@dataclass
class EvalRow:
    field: str
    ok: bool
    score: float

def _compare(field: str, pred: Any, gt: Any) -> EvalRow:
    if pred is None:
        return EvalRow(field, False, 0.0)
    base = field.rsplit(".", 1)[-1]
    if base in FUZZY_FIELDS:
        score = fuzzy_score(str(pred), str(gt))
        return EvalRow(field, score >= 0.85, score)
    ok = exact_match(str(pred), str(gt))
    return EvalRow(field, ok, 1.0 if ok else 0.0)

def evaluate_snapshot(pred: dict[str, Any] | None, expected: dict[str, Any]) -> list[EvalRow]:
    """Compare a snapshot dict (SnapshotRecord.to_dict()) against an expected record."""
    pred = pred or {}
    rows: list[EvalRow] = []

    exp_kind = expected.get("flow_kind")
    if exp_kind:
        ok = pred.get("flow_kind") == exp_kind
        rows.append(EvalRow("flow_kind", ok, 1.0 if ok else 0.0))

    for section in ("header_fields", "auxiliary_charges"):
        got = pred.get(section) or {}
        for field, gt in (expected.get(section) or {}).items():
            if gt is None or gt == "":
                continue
            rows.append(_compare(f"{section}.{field}", got.get(field), gt))

    exp_items = expected.get("line_items")
    if exp_items is not None:
        got_items = pred.get("line_items") or []
        ok = len(got_items) == len(exp_items)
        rows.append(EvalRow("line_items.count", ok, 1.0 if ok else 0.0))
        for i, gt_item in enumerate(exp_items):
            got_item = got_items[i] if i < len(got_items) else {}
            for field, gt in gt_item.items():
                rows.append(_compare(f"line_items[{i}].{field}", got_item.get(field), gt))
    return rows
