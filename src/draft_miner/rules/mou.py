from __future__ import annotations
from .base import FieldRule, FlowRules
from ..models import FlowKind

# Tripartite MoU: waste producer (second party) is the client
MOU_RULES = FlowRules(
    flow_kind=FlowKind.MOU,
    header=(
        FieldRule("sequence_prefix", ("Nomor Surat", "Nomor MoU"), "digits"),
        FieldRule("first_party", ("Pihak Pertama",)),
        FieldRule("second_party", ("Pihak Kedua",)),
        FieldRule("third_party", ("Pihak Ketiga",)),
        FieldRule("company_address", ("Alamat",)),
    ),
    item_group=(
        FieldRule("code", ("Kode", "Kode Limbah")),
        FieldRule("category", ("Jenis", "Jenis Limbah")),
    ),
    auxiliary=(
        FieldRule("service_charge", ("Biaya MoU", "MoU"), "amount"),
        FieldRule("transport_charge", ("Transportasi",), "amount"),
        FieldRule("payment_term_days", ("Termin",), "days"),
    ),
    completion_marker="MoU berhasil dibuat",
    identifying_fields=("second_party",),
)
