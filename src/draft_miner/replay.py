from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Sequence

from .config import load_settings, Settings
from .evaluate import evaluate_snapshot
from .extractor import ConversationStateExtractor
from .utils import read_jsonl, write_jsonl

logger = logging.getLogger(__name__)


def replay_transcript(transcript: dict[str, Any], settings: Settings) -> list[dict[str, Any]]:
    """Feed one recorded conversation through a fresh extractor, return emitted snapshots."""
    extractor = ConversationStateExtractor(settings)
    hint = transcript.get("flow_hint")
    snapshots: list[dict[str, Any]] = []

    for turn in transcript.get("turns") or []:
        user = turn.get("user")
        if user:
            extractor.notify_user_message(user, hint)
        if turn.get("reset"):
            extractor.reset_session()
            continue
        extractor.mine_reply(turn.get("reply") or "")
        snap = extractor.try_finalize()
        if snap is not None:
            snapshots.append(snap.to_dict())
    return snapshots


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="draft-miner-replay",
                                description="Replay recorded chat transcripts through the draft extractor.")
    p.add_argument("transcripts", help="JSONL, one transcript per line")
    p.add_argument("-o", "--output", default="outputs/snapshots.jsonl")
    p.add_argument("--expected", help="JSONL of expected snapshots keyed by transcript id")
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    outputs: list[dict[str, Any]] = []
    for idx, tr in enumerate(read_jsonl(args.transcripts)):
        tid = str(tr.get("id", idx))
        snaps = replay_transcript(tr, settings)
        logger.info("transcript %s: %d snapshot(s)", tid, len(snaps))
        outputs.append({"id": tid, "snapshots": snaps})

    write_jsonl(args.output, outputs)

    if not args.expected:
        return 0

    expected = {str(row.get("id")): row.get("snapshots") or [] for row in read_jsonl(args.expected)}
    eval_rows_all: list[dict[str, Any]] = []
    for out in outputs:
        exp_snaps = expected.get(out["id"])
        if exp_snaps is None:
            continue
        for i, exp in enumerate(exp_snaps):
            pred = out["snapshots"][i] if i < len(out["snapshots"]) else None
            for r in evaluate_snapshot(pred, exp):
                eval_rows_all.append({"id": out["id"], "snapshot": i, "field": r.field, "ok": r.ok, "score": r.score})

    if eval_rows_all:
        eval_path = os.path.join(os.path.dirname(args.output) or ".", "eval_rows.jsonl")
        write_jsonl(eval_path, eval_rows_all)
        ok_count = sum(1 for r in eval_rows_all if r["ok"])
        total = len(eval_rows_all)
        print(f"[EVAL] rows={total} ok={ok_count} acc={ok_count/total:.3f}")
        return 0 if ok_count == total else 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
