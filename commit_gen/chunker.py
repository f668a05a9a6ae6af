"""Token-bounded splitting of diff text."""

import os
from typing import Callable, List, Optional, Protocol, Sequence

import tiktoken

from commit_gen.config import DEFAULT_ENCODING, ENCODING_ENV_VAR
from commit_gen.settings import commit_gen_logger

logger = commit_gen_logger(__name__)


class Tokenizer(Protocol):
    def encode(self, text: str) -> List[int]: ...

    def decode(self, tokens: Sequence[int]) -> str: ...


class PlainTextEncoding:
    """tiktoken encoding that treats special-token text as ordinary text.

    Diffs may contain literals such as `<|endoftext|>`; for length-bounding
    they only need to be counted, never interpreted.
    """

    def __init__(self, encoding: tiktoken.Encoding) -> None:
        self._encoding = encoding

    def encode(self, text: str) -> List[int]:
        return self._encoding.encode(text, disallowed_special=())

    def decode(self, tokens: Sequence[int]) -> str:
        return self._encoding.decode(list(tokens))


def default_tokenizer(
    get_env: Callable[[str], Optional[str]] = os.getenv,
) -> Tokenizer:
    """Return the tiktoken encoding used for length-bounding."""

    encoding_name = get_env(ENCODING_ENV_VAR) or DEFAULT_ENCODING
    logger.debug("Loading tiktoken encoding: %s", encoding_name)
    return PlainTextEncoding(tiktoken.get_encoding(encoding_name))


def split_into_chunks(
    text: str, max_tokens: int, tokenizer: Optional[Tokenizer] = None
) -> List[str]:
    """Split *text* into consecutive chunks of at most *max_tokens* tokens.

    The text is encoded once, the token ids are walked in non-overlapping
    windows and every window is decoded on its own. Chunk boundaries may
    fall anywhere, including mid-line.

    Args:
        text: Text to split. An empty string yields no chunks.
        max_tokens: Maximum number of tokens per chunk.
        tokenizer: Encoder/decoder to use; tiktoken when omitted.

    Returns:
        Chunks in their original left-to-right order.

    Raises:
        ValueError: If max_tokens is not a positive integer.
    """
    if max_tokens <= 0:
        raise ValueError(f"max_tokens must be positive, got {max_tokens}")

    if not text:
        return []

    tokenizer = tokenizer or default_tokenizer()
    tokens = tokenizer.encode(text)

    chunks = [
        tokenizer.decode(tokens[start : start + max_tokens])
        for start in range(0, len(tokens), max_tokens)
    ]
    logger.debug(
        "Split %d tokens into %d chunks of up to %d tokens",
        len(tokens),
        len(chunks),
        max_tokens,
    )
    return chunks
