from __future__ import annotations
from .base import FieldRule, FlowRules
from ..models import FlowKind

INVOICE_RULES = FlowRules(
    flow_kind=FlowKind.INVOICE,
    header=(
        FieldRule("invoice_number", ("No. Invoice", "Nomor Invoice", "No Invoice")),
        FieldRule("customer_name", ("Kepada", "Nama Customer", "Nama Pelanggan")),
        FieldRule("customer_address", ("Alamat",)),
        FieldRule("invoice_date", ("Tanggal", "Tanggal Invoice"), "date"),
        FieldRule("due_date", ("Jatuh Tempo",), "date"),
    ),
    item_group=(
        FieldRule("description", ("Deskripsi", "Keterangan")),
        FieldRule("quantity", ("Qty", "Jumlah"), "digits"),
        FieldRule("unit", ("Satuan",)),
        FieldRule("price", ("Harga",), "amount"),
    ),
    auxiliary=(
        FieldRule("tax_percent", ("PPN",), "percent"),
        FieldRule("transport_charge", ("Transportasi",), "amount"),
        FieldRule("payment_term_days", ("Termin",), "days"),
    ),
    completion_marker="Invoice berhasil dibuat",
    identifying_fields=("invoice_number", "customer_name"),
)
