from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

class FlowKind(Enum):
    QUOTATION = "quotation"
    MOU = "mou"
    INVOICE = "invoice"
    NONE = "none"

    @classmethod
    def from_hint(cls, hint: str | None) -> "FlowKind":
        """Map a caller task type ("quotation", "penawaran", "mou", "invoice") to a kind."""
        if not hint:
            return cls.NONE
        low = hint.strip().lower()
        if low in ("quotation", "penawaran", "kuotasi"):
            return cls.QUOTATION
        if low in ("mou", "memorandum"):
            return cls.MOU
        if low in ("invoice", "faktur"):
            return cls.INVOICE
        return cls.NONE

LineItem = Mapping[str, str]

@dataclass
class DraftRecord:
    flow_kind: FlowKind
    header_fields: dict[str, str] = field(default_factory=dict)
    line_items: list[dict[str, str]] = field(default_factory=list)
    pending_line_item: dict[str, str] | None = None
    auxiliary_charges: dict[str, str] = field(default_factory=dict)
    # "Item #N tersimpan" ordinals already promoted into line_items
    confirmed_ordinals: set[int] = field(default_factory=set)

    def freeze(self, header_defaults: Mapping[str, str] | None = None,
               aux_defaults: Mapping[str, str] | None = None) -> "SnapshotRecord":
        """Immutable copy without the pending item. Defaults only fill absent keys."""
        header = dict(header_defaults or {})
        header.update(self.header_fields)
        aux = dict(aux_defaults or {})
        aux.update(self.auxiliary_charges)
        return SnapshotRecord(
            flow_kind=self.flow_kind,
            header_fields=MappingProxyType(header),
            line_items=tuple(MappingProxyType(dict(it)) for it in self.line_items),
            auxiliary_charges=MappingProxyType(aux),
        )

@dataclass(frozen=True)
class SnapshotRecord:
    flow_kind: FlowKind
    header_fields: Mapping[str, str]
    line_items: tuple[LineItem, ...]
    auxiliary_charges: Mapping[str, str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "flow_kind": self.flow_kind.value,
            "header_fields": dict(self.header_fields),
            "line_items": [dict(it) for it in self.line_items],
            "auxiliary_charges": dict(self.auxiliary_charges),
        }
