"""Tests for the transcript replay CLI."""

from __future__ import annotations

import json

import pytest

from draft_miner.config import Settings
from draft_miner.replay import main, replay_transcript
from draft_miner.utils import read_jsonl, write_jsonl

TRANSCRIPT = {
    "id": "q-1",
    "flow_hint": "quotation",
    "turns": [
        {"user": "Buatkan quotation", "reply": "Nama: <b>PT Contoh Abadi</b>"},
        {"user": "B105", "reply": "Kode: <b>B105</b>, Jenis: <b>Oli Bekas</b>, Satuan: <b>Liter</b>, Harga: <b>Rp 15.000</b>"},
        {"user": "ya", "reply": "Item #1 tersimpan"},
        {"user": "selesai", "reply": "🎉 Quotation berhasil dibuat"},
    ],
}

SNAPSHOT = {
    "flow_kind": "quotation",
    "header_fields": {"company_name": "PT Contoh Abadi"},
    "line_items": [{"code": "B105", "category": "Oli Bekas", "unit": "Liter", "price": "15000"}],
    "auxiliary_charges": {},
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("DRAFT_MINER_LOG_LEVEL", "DRAFT_MINER_STRICT_FINALIZE", "DRAFT_MINER_APPLY_DEFAULTS"):
        monkeypatch.delenv(var, raising=False)


def test_replay_transcript_emits_snapshot():
    assert replay_transcript(TRANSCRIPT, Settings()) == [SNAPSHOT]


def test_reset_turn_drops_draft():
    tr = {
        "turns": [
            {"user": "Buatkan quotation", "reply": TRANSCRIPT["turns"][0]["reply"]},
            {"reset": True},
            *TRANSCRIPT["turns"][1:],
        ]
    }
    assert replay_transcript(tr, Settings()) == []


def test_cli_writes_snapshots(tmp_path):
    src = tmp_path / "transcripts.jsonl"
    out = tmp_path / "out" / "snapshots.jsonl"
    write_jsonl(str(src), [TRANSCRIPT, {"id": "empty", "turns": []}])

    assert main([str(src), "-o", str(out)]) == 0

    rows = list(read_jsonl(str(out)))
    assert rows == [{"id": "q-1", "snapshots": [SNAPSHOT]}, {"id": "empty", "snapshots": []}]


def test_cli_evaluates_against_expected(tmp_path, capsys):
    src = tmp_path / "transcripts.jsonl"
    exp = tmp_path / "expected.jsonl"
    out = tmp_path / "snapshots.jsonl"
    write_jsonl(str(src), [TRANSCRIPT])
    write_jsonl(str(exp), [{"id": "q-1", "snapshots": [SNAPSHOT]}])

    assert main([str(src), "-o", str(out), "--expected", str(exp)]) == 0

    assert "[EVAL]" in capsys.readouterr().out
    eval_rows = [json.loads(ln) for ln in (tmp_path / "eval_rows.jsonl").read_text(encoding="utf-8").splitlines()]
    assert eval_rows and all(r["ok"] for r in eval_rows)


def test_cli_reports_mismatch(tmp_path):
    src = tmp_path / "transcripts.jsonl"
    exp = tmp_path / "expected.jsonl"
    write_jsonl(str(src), [TRANSCRIPT])
    wrong = {**SNAPSHOT, "header_fields": {"company_name": "CV Berbeda Sekali"}}
    write_jsonl(str(exp), [{"id": "q-1", "snapshots": [wrong]}])

    assert main([str(src), "-o", str(tmp_path / "s.jsonl"), "--expected", str(exp)]) == 1
