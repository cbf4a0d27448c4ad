"""Shared fixtures: extractor instances in a few starting states."""

from __future__ import annotations

import pytest

from draft_miner.config import Settings
from draft_miner.extractor import ConversationStateExtractor


@pytest.fixture
def extractor() -> ConversationStateExtractor:
    return ConversationStateExtractor()


@pytest.fixture
def quotation(extractor: ConversationStateExtractor) -> ConversationStateExtractor:
    """Extractor with an active quotation flow and no draft yet."""
    extractor.notify_user_message("Buatkan quotation")
    return extractor


@pytest.fixture
def lenient_extractor() -> ConversationStateExtractor:
    return ConversationStateExtractor(Settings(strict_finalize=False))
