import logging
import os
from typing import Callable, List, Optional

from commit_gen.chunker import Tokenizer, default_tokenizer, split_into_chunks
from commit_gen.config import (
    CHUNK_MAX_TOKENS,
    CHUNK_MODEL_ENV_VAR,
    DEFAULT_CHUNK_MODEL,
    DEFAULT_FUSION_MODEL,
    FUSION_MODEL_ENV_VAR,
    MAX_DIFF_CHARS,
    PAYLOAD_TOO_LARGE_MESSAGE,
    PROVIDER_FAILURE_MESSAGE,
)
from commit_gen.errors import PayloadTooLargeError
from commit_gen.llm import ChatCompletionProvider
from commit_gen.schemas import (
    CommitMessageResponse,
    FailureKind,
    FailureResponse,
    Result,
)
from commit_gen.settings import commit_gen_logger
from commit_gen.summarizer import CommitSummarizer


class CommitGenPipeline:
    def __init__(
        self,
        summarizer: CommitSummarizer,
        tokenizer: Optional[Tokenizer] = None,
        get_env: Callable[[str], Optional[str]] = os.getenv,
        logger: Optional[logging.Logger] = None,
        max_diff_chars: int = MAX_DIFF_CHARS,
        chunk_max_tokens: int = CHUNK_MAX_TOKENS,
    ) -> None:
        self._logger = logger or commit_gen_logger(__name__)
        self._summarizer = summarizer
        self._tokenizer = tokenizer
        self._get_env = get_env
        self._max_diff_chars = max_diff_chars
        self._chunk_max_tokens = chunk_max_tokens

    @classmethod
    def from_env(
        cls,
        get_env: Callable[[str], Optional[str]] = os.getenv,
        chunk_model: Optional[str] = None,
        fusion_model: Optional[str] = None,
    ) -> "CommitGenPipeline":
        """Build the pipeline and its shared provider client from the environment."""

        provider = ChatCompletionProvider(get_env=get_env)
        summarizer = CommitSummarizer(
            provider,
            chunk_model=chunk_model or get_env(CHUNK_MODEL_ENV_VAR) or DEFAULT_CHUNK_MODEL,
            fusion_model=fusion_model
            or get_env(FUSION_MODEL_ENV_VAR)
            or DEFAULT_FUSION_MODEL,
        )
        return cls(summarizer, get_env=get_env)

    def generate(self, diff: str) -> CommitMessageResponse:
        self._logger.debug("Starting diff processing (%d chars)", len(diff))

        safe_diff = self._truncate_diff(diff)
        # Tokenizer load errors must surface through run().
        tokenizer = self._tokenizer or default_tokenizer(self._get_env)
        chunks = split_into_chunks(safe_diff, self._chunk_max_tokens, tokenizer)
        self._logger.info("Split into %d chunks", len(chunks))

        summaries: List[str] = []
        for index, chunk in enumerate(chunks, start=1):
            summary = self._summarizer.summarize_chunk(chunk)
            summaries.append(summary)
            self._logger.info("Chunk %d/%d summary: %s", index, len(chunks), summary)

        final_commit = self._summarizer.fuse(summaries)
        self._logger.info("Final commit: %s", final_commit)

        return CommitMessageResponse(message=final_commit)

    def run(self, diff: str) -> Result:
        """Generate a commit message, classifying any failure for the caller."""

        try:
            return Result.ok(self.generate(diff))
        except PayloadTooLargeError as error:
            self._logger.error("Diff rejected as too large: %s", error, exc_info=True)
            return Result.err(
                FailureResponse(
                    kind=FailureKind.PAYLOAD_TOO_LARGE,
                    message=PAYLOAD_TOO_LARGE_MESSAGE,
                    status_code=400,
                )
            )
        except Exception as error:
            self._logger.error(
                "Commit message generation failed: %s", error, exc_info=True
            )
            return Result.err(
                FailureResponse(
                    kind=FailureKind.PROVIDER_FAILURE,
                    message=PROVIDER_FAILURE_MESSAGE,
                    status_code=500,
                )
            )

    def _truncate_diff(self, diff: str) -> str:
        if len(diff) <= self._max_diff_chars:
            return diff

        self._logger.debug(
            "Keeping the last %d of %d diff chars", self._max_diff_chars, len(diff)
        )
        return diff[len(diff) - self._max_diff_chars :]
