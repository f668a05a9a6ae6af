#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Module wrapping the remote chat-completion provider."""

import logging
import os
from typing import Any, Callable, List, Optional, Union

import openai
from dotenv import load_dotenv
from langchain_openai import ChatOpenAI
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage

from commit_gen.config import (
    API_KEY_ENV_VAR,
    BASE_URL_ENV_VAR,
    DEFAULT_BASE_URL,
    DEFAULT_CHUNK_MODEL,
)
from commit_gen.settings import commit_gen_logger
from commit_gen.errors import (
    ApiKeyMissingError,
    PayloadTooLargeError,
    ProviderFailureError,
)

# Load .env automatically
load_dotenv()


PAYLOAD_TOO_LARGE_STATUS = 413


class ChatCompletionProvider:
    """Send chat prompts to the completion provider and return plain text.

    One provider is built per process and shared by every pipeline call.
    The model identifier and sampling parameters travel with each request,
    so the same client serves both the per-chunk and the fusion step.

    Attributes:
        llm (BaseChatModel): The chat model client.
        base_url (str): OpenAI-compatible endpoint of the provider.
    """

    # --- Initialization ---
    def __init__(
        self,
        llm: Optional[Union[ChatOpenAI, BaseChatModel]] = None,
        get_env: Callable[[str], Optional[str]] = os.getenv,
        validate_api_key: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize the provider.

        Args:
            llm: Pre-configured chat model instance.
            get_env: Function to retrieve environment variables.
            validate_api_key: Whether to validate the API key during initialization.
            logger: Logger to use instead of the module default.

        Raises:
            ApiKeyMissingError: If GROQ_API_KEY is not found and validation enabled.
        """
        self._logger = logger or commit_gen_logger(__name__)
        self._get_env = get_env
        self.base_url = get_env(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL

        if validate_api_key:
            self._validate_api_key()

        self.llm = llm or self._build_model()

    # --- Public methods ---
    def complete(self, messages: List[BaseMessage], model: str, **params: Any) -> str:
        """Request a completion and return its text content.

        Args:
            messages: Chat messages forming the prompt.
            model: Remote model identifier.
            **params: Sampling parameters (temperature, max_tokens, top_p).

        Returns:
            The response text, or an empty string when the provider sent none.

        Raises:
            PayloadTooLargeError: If the provider rejected the request size.
            ProviderFailureError: On any other provider failure.
        """
        self._logger.debug("Requesting completion from %s with %s", model, params)

        try:
            response = self.llm.invoke(messages, model=model, **params)
        except openai.APIStatusError as e:
            if e.status_code == PAYLOAD_TOO_LARGE_STATUS:
                self._logger.error("Provider rejected payload for %s: %s", model, e)
                raise PayloadTooLargeError(str(e)) from e
            self._logger.error("Provider returned status %s: %s", e.status_code, e)
            raise ProviderFailureError(str(e)) from e
        except Exception as e:
            self._logger.error(
                "Completion request to %s failed: %s", model, str(e), exc_info=True
            )
            raise ProviderFailureError(str(e)) from e

        content = getattr(response, "content", None)
        if not isinstance(content, str):
            self._logger.warning("Completion from %s carried no text content", model)
            return ""

        return content

    # --- Private methods ---
    def _build_model(self) -> ChatOpenAI:
        """Build the shared ChatOpenAI client against the provider endpoint.

        Returns:
            Configured ChatOpenAI instance.
        """
        self._logger.debug("Building ChatOpenAI client for %s", self.base_url)

        return ChatOpenAI(
            model=DEFAULT_CHUNK_MODEL,
            api_key=self._get_env(API_KEY_ENV_VAR),
            base_url=self.base_url,
            max_retries=0,
        )

    def _validate_api_key(self) -> None:
        """Validate that GROQ_API_KEY is available.

        Raises:
            ApiKeyMissingError: If GROQ_API_KEY is not found.
        """
        self._logger.debug("Validating %s", API_KEY_ENV_VAR)

        if not self._get_env(API_KEY_ENV_VAR):
            error_msg = f"Missing {API_KEY_ENV_VAR}. Set it in your .env file."
            self._logger.error(error_msg)
            raise ApiKeyMissingError(error_msg)

        self._logger.debug("%s found", API_KEY_ENV_VAR)

    # --- Dunder methods ---
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url!r})"
