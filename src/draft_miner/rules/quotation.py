from __future__ import annotations
from .base import FieldRule, FlowRules
from ..models import FlowKind

HEADER = (
    FieldRule("sequence_prefix", ("Nomor Surat",), "digits"),
    FieldRule("company_name", ("Nama", "Nama Perusahaan")),
    FieldRule("company_address", ("Alamat", "Alamat Perusahaan")),
)

# Kode + Jenis + Satuan + Harga must co-occur in one reply
ITEM_GROUP = (
    FieldRule("code", ("Kode", "Kode Limbah")),
    FieldRule("category", ("Jenis", "Jenis Limbah")),
    FieldRule("unit", ("Satuan",)),
    FieldRule("price", ("Harga",), "amount"),
)

AUXILIARY = (
    FieldRule("transport_charge", ("Transportasi",), "amount"),
    FieldRule("service_charge", ("MoU",), "amount"),
    FieldRule("payment_term_days", ("Termin",), "days"),
)

QUOTATION_RULES = FlowRules(
    flow_kind=FlowKind.QUOTATION,
    header=HEADER,
    item_group=ITEM_GROUP,
    auxiliary=AUXILIARY,
    completion_marker="Quotation berhasil dibuat",
    identifying_fields=("company_name",),
)
