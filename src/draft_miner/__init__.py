from .config import Settings, load_settings
from .errors import ChatClientError, DraftMinerError, ExtractorStateError
from .extractor import ConversationStateExtractor
from .flows import detect_flow
from .miner import MineResult, mine
from .models import DraftRecord, FlowKind, SnapshotRecord
from .utils import normalize_reply

__all__ = [
    "Settings",
    "load_settings",
    "ChatClientError",
    "DraftMinerError",
    "ExtractorStateError",
    "ConversationStateExtractor",
    "detect_flow",
    "MineResult",
    "mine",
    "DraftRecord",
    "FlowKind",
    "SnapshotRecord",
    "normalize_reply",
]
