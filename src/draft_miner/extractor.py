from __future__ import annotations
import logging

from .config import AUXILIARY_FIELDS, QUOTATION_SNAPSHOT_DEFAULTS, Settings
from .errors import ExtractorStateError
from .flows import detect_flow
from .miner import MineResult, mine
from .models import DraftRecord, FlowKind, SnapshotRecord
from .rules import FlowRules, rules_for
from .utils import normalize_reply

logger = logging.getLogger(__name__)


class ConversationStateExtractor:
    """
    Session-scoped state machine that turns assistant replies into a draft record.

    One instance per chat session. Call order per turn:

        notify_user_message(text, flow_hint)  ->  mine_reply(reply)  ->  try_finalize()

    Switching to a different flow kind discards the whole draft, including
    confirmed line items. That transition is lossy on purpose and is logged
    at WARNING level.

    try_finalize() before any mine_reply() in the session is a misuse and
    raises ExtractorStateError when settings.strict_finalize is on (the
    default); otherwise it returns None.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self._active = FlowKind.NONE
        self._draft: DraftRecord | None = None
        self._last_reply: str | None = None
        self._last_completion = False
        self._replies_mined = 0

    @property
    def active_flow(self) -> FlowKind:
        return self._active

    @property
    def has_pending_item(self) -> bool:
        return self._draft is not None and self._draft.pending_line_item is not None

    def current_draft(self) -> SnapshotRecord | None:
        """Frozen view of the live draft (never includes the pending item)."""
        return self._draft.freeze() if self._draft is not None else None

    # ---------- lifecycle ----------

    def notify_user_message(self, text: str, flow_hint: str | None = None) -> FlowKind:
        # the screen's task type pins the flow; keywords only classify unhinted messages
        detected = FlowKind.from_hint(flow_hint)
        if detected is FlowKind.NONE:
            detected = detect_flow(text)

        # neutral message: keep whatever flow is in progress
        if detected is FlowKind.NONE or detected is self._active:
            return self._active

        if self._active is not FlowKind.NONE:
            self._discard_draft(f"flow switch {self._active.value} -> {detected.value}")
        else:
            logger.info("flow adopted: %s", detected.value)

        self._active = detected
        self._draft = None
        self._last_reply = None
        self._last_completion = False
        return self._active

    def reset_session(self) -> None:
        if self._draft is not None:
            self._discard_draft("session reset")
        self._active = FlowKind.NONE
        self._draft = None
        self._last_reply = None
        self._last_completion = False
        self._replies_mined = 0
        logger.info("session reset")

    def _discard_draft(self, why: str) -> None:
        d = self._draft
        if d is None:
            logger.info("%s (no draft to discard)", why)
            return
        logger.warning(
            "%s: discarding draft with %d header fields, %d line items, pending item=%s",
            why, len(d.header_fields), len(d.line_items), d.pending_line_item is not None,
        )

    # ---------- mining ----------

    def mine_reply(self, text: str) -> None:
        body = normalize_reply(text)
        self._replies_mined += 1

        if body and body == self._last_reply:
            logger.debug("identical reply fed twice, skipping")
            return
        self._last_reply = body
        self._last_completion = False

        rules = rules_for(self._active)
        if rules is None:
            logger.debug("no active flow, reply not mined")
            return

        res = mine(body, rules, normalized=True)
        self._last_completion = res.completion
        self._merge(res, rules)

    def _merge(self, res: MineResult, rules: FlowRules) -> None:
        if self._draft is None:
            if not (res.header or res.auxiliary or res.item):
                return
            self._draft = DraftRecord(flow_kind=rules.flow_kind)
        draft = self._draft

        draft.header_fields.update(res.header)
        draft.auxiliary_charges.update(res.auxiliary)
        if res.item is not None:
            draft.pending_line_item = res.item

        if res.item_confirmed:
            self._confirm_item(draft, res.confirmed_ordinal)

        if res.header or res.auxiliary or res.item:
            logger.debug("draft updated: %s", ", ".join(res.reasons))

    def _confirm_item(self, draft: DraftRecord, ordinal: int | None) -> None:
        pending = draft.pending_line_item
        if pending is None:
            logger.debug("item confirmation without pending item, ignored")
            return
        if ordinal is not None and ordinal in draft.confirmed_ordinals:
            logger.debug("item #%d already confirmed, not appending again", ordinal)
            if pending in draft.line_items:
                draft.pending_line_item = None
            return

        draft.line_items.append(pending)
        draft.pending_line_item = None
        if ordinal is not None:
            draft.confirmed_ordinals.add(ordinal)
        logger.info("line item confirmed (%d total)", len(draft.line_items))

    # ---------- finalize ----------

    def try_finalize(self, flow_kind_expected: FlowKind | str | None = None) -> SnapshotRecord | None:
        if self._replies_mined == 0:
            if self.settings.strict_finalize:
                raise ExtractorStateError("try_finalize() called before any mine_reply() in this session")
            return None

        if not self._last_completion:
            return None

        kind = self._active
        if flow_kind_expected is not None:
            expected = (flow_kind_expected if isinstance(flow_kind_expected, FlowKind)
                        else FlowKind.from_hint(flow_kind_expected))
            if expected is not kind:
                logger.debug("completion seen for %s but caller expects %s", kind.value, expected.value)
                return None

        rules = rules_for(kind)
        if rules is None:
            return None

        if not self._meets_minimum(rules):
            logger.warning("completion marker for %s seen but draft is incomplete, no snapshot", kind.value)
            return None

        snapshot = self._freeze_for_output(self._draft, kind)

        # reset before handing out the snapshot
        self._draft = None
        self._active = FlowKind.NONE
        self._last_completion = False

        logger.info("snapshot emitted for %s with %d line items", kind.value, len(snapshot.line_items))
        return snapshot

    def _meets_minimum(self, rules: FlowRules) -> bool:
        d = self._draft
        if d is None or not d.line_items:
            return False
        return any(d.header_fields.get(f) for f in rules.identifying_fields)

    def _freeze_for_output(self, draft: DraftRecord, kind: FlowKind) -> SnapshotRecord:
        if not (self.settings.apply_snapshot_defaults and kind is FlowKind.QUOTATION):
            return draft.freeze()
        header_defaults = {k: v for k, v in QUOTATION_SNAPSHOT_DEFAULTS.items() if k not in AUXILIARY_FIELDS}
        aux_defaults = {k: v for k, v in QUOTATION_SNAPSHOT_DEFAULTS.items() if k in AUXILIARY_FIELDS}
        return draft.freeze(header_defaults, aux_defaults)
