from typing import List, Sequence

import pytest

from commit_gen import chunker
from commit_gen.chunker import default_tokenizer, split_into_chunks


class CharTokenizer:
    """One token per character, lossless round trip."""

    def __init__(self) -> None:
        self.encoded: List[str] = []

    def encode(self, text: str) -> List[int]:
        self.encoded.append(text)
        return [ord(char) for char in text]

    def decode(self, tokens: Sequence[int]) -> str:
        return "".join(chr(token) for token in tokens)


class BrokenTokenizer:
    def encode(self, text: str) -> List[int]:
        raise RuntimeError("tokenizer exploded")

    def decode(self, tokens: Sequence[int]) -> str:  # pragma: no cover - never reached
        return ""


def test_split_9000_tokens_into_three_ordered_chunks():
    text = "a" * 3000 + "b" * 3000 + "c" * 3000

    chunks = split_into_chunks(text, 3000, CharTokenizer())

    assert chunks == ["a" * 3000, "b" * 3000, "c" * 3000]


def test_last_chunk_may_be_shorter():
    chunks = split_into_chunks("x" * 7, 3, CharTokenizer())

    assert chunks == ["xxx", "xxx", "x"]


def test_chunks_fit_budget_and_reconstruct_input():
    tokenizer = CharTokenizer()
    text = "diff --git a/app.py b/app.py\n+print('hello')\n-print('bye')\n" * 40

    chunks = split_into_chunks(text, 50, tokenizer)

    assert all(len(tokenizer.encode(chunk)) <= 50 for chunk in chunks)
    assert "".join(chunks) == text


def test_empty_text_yields_no_chunks():
    tokenizer = CharTokenizer()

    assert split_into_chunks("", 3000, tokenizer) == []
    assert tokenizer.encoded == []


@pytest.mark.parametrize("max_tokens", [0, -1])
def test_non_positive_max_tokens_rejected(max_tokens):
    with pytest.raises(ValueError):
        split_into_chunks("abc", max_tokens, CharTokenizer())


def test_tokenizer_failures_propagate():
    with pytest.raises(RuntimeError, match="tokenizer exploded"):
        split_into_chunks("abc", 10, BrokenTokenizer())


def test_default_tokenizer_uses_encoding_from_env(monkeypatch):
    requested: List[str] = []

    def fake_get_encoding(name: str) -> CharTokenizer:
        requested.append(name)
        return CharTokenizer()

    monkeypatch.setattr(chunker.tiktoken, "get_encoding", fake_get_encoding)

    default_tokenizer(get_env=lambda key: "o200k_base" if key == "COMMIT_GEN_ENCODING" else None)
    default_tokenizer(get_env=lambda key: None)

    assert requested == ["o200k_base", "cl100k_base"]


class RecordingEncoding(CharTokenizer):
    """Mimics tiktoken's keyword arguments on encode."""

    def __init__(self) -> None:
        super().__init__()
        self.encode_kwargs: List[dict] = []

    def encode(self, text: str, **kwargs) -> List[int]:  # type: ignore[override]
        self.encode_kwargs.append(kwargs)
        return super().encode(text)


def test_default_tokenizer_counts_special_token_text_as_plain_text(monkeypatch):
    encoding = RecordingEncoding()
    monkeypatch.setattr(chunker.tiktoken, "get_encoding", lambda name: encoding)
    diff = "+marker = '<|endoftext|>'\n"

    chunks = split_into_chunks(diff, 10, default_tokenizer(get_env=lambda key: None))

    assert "".join(chunks) == diff
    assert encoding.encode_kwargs == [{"disallowed_special": ()}]
