"""Per-chunk summaries and their fusion into one commit message."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from langchain_core.messages import BaseMessage, HumanMessage

from commit_gen.config import (
    CHUNK_SUMMARY_PARAMS,
    CHUNK_SUMMARY_PROMPT,
    DEFAULT_CHUNK_MODEL,
    DEFAULT_FUSION_MODEL,
    FALLBACK_MESSAGE,
    FUSION_PARAMS,
    FUSION_PROMPT,
)
from commit_gen.llm import ChatCompletionProvider
from commit_gen.sanitizer import sanitize_commit_message
from commit_gen.settings import commit_gen_logger


class CommitSummarizer:
    """Issue the two kinds of completion calls the pipeline needs."""

    def __init__(
        self,
        provider: ChatCompletionProvider,
        chunk_model: str = DEFAULT_CHUNK_MODEL,
        fusion_model: str = DEFAULT_FUSION_MODEL,
        chunk_params: Optional[Dict[str, Any]] = None,
        fusion_params: Optional[Dict[str, Any]] = None,
        fallback: str = FALLBACK_MESSAGE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or commit_gen_logger(__name__)
        self.provider = provider
        self.chunk_model = chunk_model
        self.fusion_model = fusion_model
        self.chunk_params = dict(
            CHUNK_SUMMARY_PARAMS if chunk_params is None else chunk_params
        )
        self.fusion_params = dict(FUSION_PARAMS if fusion_params is None else fusion_params)
        self.fallback = fallback

    # --- Public API ---
    def summarize_chunk(self, chunk: str) -> str:
        """Return a short phrase describing what changed in *chunk*."""

        messages = self._build_chunk_messages(chunk)
        content = self.provider.complete(messages, self.chunk_model, **self.chunk_params)

        summary = content.strip() or self.fallback
        self._logger.debug("Chunk summary: %s", summary)
        return summary

    def fuse(self, summaries: Sequence[str]) -> str:
        """Combine ordered chunk summaries into one sanitized commit message."""

        messages = self._build_fusion_messages(summaries)
        content = self.provider.complete(messages, self.fusion_model, **self.fusion_params)

        raw = content.strip() or self.fallback
        self._logger.debug("Raw fusion response: %s", raw)
        return sanitize_commit_message(raw, fallback=self.fallback)

    # --- Internal helpers ---
    @staticmethod
    def _build_chunk_messages(chunk: str) -> List[BaseMessage]:
        return [HumanMessage(content=CHUNK_SUMMARY_PROMPT.format(chunk=chunk))]

    @staticmethod
    def _build_fusion_messages(summaries: Sequence[str]) -> List[BaseMessage]:
        return [HumanMessage(content=FUSION_PROMPT.format(summaries="\n".join(summaries)))]

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(chunk_model={self.chunk_model!r}, "
            f"fusion_model={self.fusion_model!r})"
        )
