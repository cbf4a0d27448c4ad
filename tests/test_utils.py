"""Tests for reply markup normalization and value normalizers."""

from __future__ import annotations

import pytest

from draft_miner.utils import normalize_reply, read_jsonl, write_jsonl
from draft_miner.validate import (
    looks_like_placeholder,
    normalize_amount,
    normalize_date_iso,
    normalize_digits,
    normalize_percent,
)


class TestNormalizeReply:
    def test_html_bold_and_breaks(self):
        out = normalize_reply("Nama: <b>PT X</b><br/>Alamat: <strong>Jl. Mawar 1</strong>")
        assert out == "Nama: **PT X**\nAlamat: **Jl. Mawar 1**"

    def test_entity_encoded_tags(self):
        out = normalize_reply("Nama: &lt;b&gt;PT X&lt;/b&gt;")
        assert out == "Nama: **PT X**"

    def test_double_escaped_entities(self):
        out = normalize_reply("Nama: &amp;lt;b&amp;gt;PT X&amp;lt;/b&amp;gt;")
        assert out == "Nama: **PT X**"

    def test_json_unicode_escapes(self):
        out = normalize_reply(r"Kode: <b>B105</b>\nJenis: \<b\>Oli\</b\>")
        assert out == "Kode: **B105**\nJenis: **Oli**"

    def test_markdown_bold_untouched(self):
        assert normalize_reply("Nama: **PT Contoh Abadi**") == "Nama: **PT Contoh Abadi**"

    def test_whitespace_and_nbsp_collapsed(self):
        out = normalize_reply("Nama:&nbsp;&nbsp; <b>PT   X</b>  \r\n\n\n\nSelesai")
        assert out == "Nama: **PT X**\n\nSelesai"

    def test_unknown_tags_stripped(self):
        out = normalize_reply("<div>Nama: <i>perusahaan</i> <b>PT X</b></div>")
        assert out == "Nama: perusahaan **PT X**"

    @pytest.mark.parametrize("value", ["", None, 42])
    def test_non_text_is_empty(self, value):
        assert normalize_reply(value) == ""


class TestValueNormalizers:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Rp 1.200.000", "1200000"),
            ("Rp 1.200.000/ritase", "1200000"),
            ("Rp. 15.000,00", "15000"),
            ("Rp 2.500.000/Tahun", "2500000"),
            ("Rp 1,200,000", "1200000"),
            ("Rp 15000", "15000"),
            ("Rp 12.500,50", "12500.50"),
        ],
    )
    def test_amount(self, raw, expected):
        assert normalize_amount(raw) == expected

    def test_amount_without_digits(self):
        assert normalize_amount("Rp -") is None

    def test_digits_and_percent(self):
        assert normalize_digits("14 hari") == "14"
        assert normalize_digits("hari") is None
        assert normalize_percent("11%") == "11"
        assert normalize_percent("1,5 %") == "1.5"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("12 Januari 2026", "2026-01-12"),
            ("12/01/2026", "2026-01-12"),
            ("05-08-2026", "2026-08-05"),
            ("17 Agustus 2026", "2026-08-17"),
            ("2026-03-05", "2026-03-05"),
        ],
    )
    def test_date_day_first(self, raw, expected):
        assert normalize_date_iso(raw) == expected

    def test_date_unparseable(self):
        assert normalize_date_iso("besok pagi") is None

    @pytest.mark.parametrize("raw", ["14", "Januari 2026", "12 Januari", "31/02/2026"])
    def test_date_incomplete_or_invalid(self, raw):
        assert normalize_date_iso(raw) is None

    @pytest.mark.parametrize(
        "raw",
        ["alamat belum ditemukan", "Tidak ditemukan", "-", "[Alamat]", "  ", "belum diisi"],
    )
    def test_placeholders(self, raw):
        assert looks_like_placeholder(raw)

    def test_real_value_is_not_placeholder(self):
        assert not looks_like_placeholder("Jl. Industri No. 5, Bekasi")


def test_jsonl_roundtrip(tmp_path):
    path = str(tmp_path / "out" / "rows.jsonl")
    write_jsonl(path, [{"a": 1}, {"b": "ü"}])
    assert list(read_jsonl(path)) == [{"a": 1}, {"b": "ü"}]
