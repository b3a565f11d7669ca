"""Token counting with tiktoken."""
from __future__ import annotations

from typing import Final, Optional

import tiktoken

# GPT-4o encoding
DEFAULT_ENCODING: Final[str] = "o200k_base"


class TokenCounter:
    """Counts tokens of a text; the encoding is loaded on first use and cached."""

    def __init__(self, encoding_name: str = DEFAULT_ENCODING) -> None:
        self.encoding_name = encoding_name
        self._encoding: Optional[tiktoken.Encoding] = None

    @property
    def encoding(self) -> tiktoken.Encoding:
        if self._encoding is None:
            self._encoding = tiktoken.get_encoding(self.encoding_name)
        return self._encoding

    def __call__(self, text: str) -> int:
        return len(self.encoding.encode(text, disallowed_special=()))
