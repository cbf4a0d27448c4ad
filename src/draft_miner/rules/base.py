from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Literal

from ..models import FlowKind

Shape = Literal["text", "digits", "amount", "days", "percent", "date"]

# "Item #2 tersimpan", "✅ Item #1 berhasil tersimpan"
ITEM_CONFIRMED_RE = re.compile(r"\bitem\s*#\s*(\d+)?[^\n]*?\btersimpan\b", re.IGNORECASE)

def _label_regex(labels: tuple[str, ...]) -> re.Pattern[str]:
    alts = []
    for lab in labels:
        alts.append(r"\s+".join(re.escape(p) for p in lab.split()))
    # Label: ... **value**  (value stays on the label's line and before the next label)
    return re.compile(
        r"(?<![^\W\d_])(?:" + "|".join(alts) + r")\s*[:：][^\n*:：]*?\*\*\s*([^*\n]+?)\s*\*\*",
        re.IGNORECASE,
    )

def _phrase_regex(phrase: str) -> re.Pattern[str]:
    return re.compile(r"\s+".join(re.escape(p) for p in phrase.split()), re.IGNORECASE)

@dataclass(frozen=True)
class FieldRule:
    field: str
    labels: tuple[str, ...]
    shape: Shape = "text"
    pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", _label_regex(self.labels))

    def search(self, text: str) -> str | None:
        m = self.pattern.search(text)
        return m.group(1) if m else None

@dataclass(frozen=True)
class FlowRules:
    flow_kind: FlowKind
    header: tuple[FieldRule, ...]
    item_group: tuple[FieldRule, ...]
    auxiliary: tuple[FieldRule, ...]
    completion_marker: str
    # A snapshot needs at least one of these header fields
    identifying_fields: tuple[str, ...]
    completion_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "completion_pattern", _phrase_regex(self.completion_marker))

    def is_completion(self, text: str) -> bool:
        return bool(self.completion_pattern.search(text.replace("**", "")))

