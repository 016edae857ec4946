from __future__ import annotations

import re
from typing import List

from bioreel_core.config import MAX_TOKENS

_WHITESPACE = re.compile(r"\s+")
_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9\s]")


def normalize_text(text: str | None) -> str:
    """Lower-case, collapse whitespace runs to a single space, trim."""
    return _WHITESPACE.sub(" ", str(text or "").lower()).strip()


def tokenize(text: str | None) -> List[str]:
    """
    Tokenizer shared by training and prediction.

    Keeps ``[a-z0-9]`` runs of the normalized text, no stemming or stop words.
    Documents longer than MAX_TOKENS are truncated, not rejected.
    """
    cleaned = _NON_TOKEN_CHARS.sub(" ", normalize_text(text))
    return [tok for tok in cleaned.split() if tok][:MAX_TOKENS]
