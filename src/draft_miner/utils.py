from __future__ import annotations
import html
import json
import os
import re
from typing import Any, Iterable, Iterator

_BOLD_OPEN_RE = re.compile(r"<\s*(?:b|strong)(?:\s[^>]*)?>", re.IGNORECASE)
_BOLD_CLOSE_RE = re.compile(r"<\s*/\s*(?:b|strong)\s*>", re.IGNORECASE)
_BREAK_RE = re.compile(r"<\s*br\s*/?\s*>|<\s*/\s*(?:p|div|li)\s*>", re.IGNORECASE)
_LIST_ITEM_RE = re.compile(r"<\s*li(?:\s[^>]*)?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")

# JSON / backslash escapes the backend sometimes leaves in reply text
_ESCAPES = [
    ("\\u003C", "<"), ("\\u003c", "<"),
    ("\\u003E", ">"), ("\\u003e", ">"),
    ("\\u002F", "/"), ("\\u002f", "/"),
    ("\\n", "\n"), ("\\r", ""), ("\\t", " "),
    ("\\<", "<"), ("\\>", ">"),
]

def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)

def write_jsonl(path: str, rows: Iterable[dict[str, Any]]) -> None:
    ensure_dir(os.path.dirname(path) or ".")
    with open(path, "w", encoding="utf-8") as f:
        for r in rows:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")

def read_jsonl(path: str) -> Iterator[dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        for ln in f:
            ln = ln.strip()
            if ln:
                yield json.loads(ln)

def safe_lower(s: str) -> str:
    return s.lower() if isinstance(s, str) else ""

def _decode_once(s: str) -> str:
    for raw, repl in _ESCAPES:
        s = s.replace(raw, repl)
    return html.unescape(s)

def _markup_to_text(s: str) -> str:
    s = _BOLD_OPEN_RE.sub("**", s)
    s = _BOLD_CLOSE_RE.sub("**", s)
    s = _BREAK_RE.sub("\n", s)
    s = _LIST_ITEM_RE.sub("• ", s)
    return _TAG_RE.sub("", s)

def normalize_reply(text: str) -> str:
    """
    Flatten a backend reply into plain lines with **bold** markers.

    Replies arrive as HTML (<b>, <br>), markdown bold, or double-escaped
    variants of either (\\u003Cb\\u003E, &lt;b&gt;, \\<b\\>). Decoding is
    repeated until the text stops changing.
    """
    if not isinstance(text, str) or not text:
        return ""
    s = text
    for _ in range(5):
        before = s
        s = _markup_to_text(_decode_once(s))
        s = s.replace("\r", "").replace("\u00a0", " ")
        s = re.sub(r"[ \t]+", " ", s)
        s = re.sub(r" *\n *", "\n", s)
        s = re.sub(r"\n{3,}", "\n\n", s).strip()
        if s == before:
            break
    return s
