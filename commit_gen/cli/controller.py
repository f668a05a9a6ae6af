import logging
from typing import Callable, Optional

import click
import pyperclip

from commit_gen.schemas import CommitMessageResponse, FailureResponse
from commit_gen.settings import commit_gen_logger

from .service import CommitGenService


NO_DIFF_MESSAGE = (
    "--- ❌ No changes detected. Run `git diff` in your project "
    "or pipe its output in. ---"
)


class CommitGenController:
    """Main controller orchestrating the CLI workflow."""

    def __init__(
        self,
        commit_gen_service: CommitGenService,
        logger: Optional[logging.Logger] = None,
        clipboard_copy: Callable[[str], None] = pyperclip.copy,
        echo: Callable[..., None] = click.echo,
        echo_err: Optional[Callable[[str], None]] = None,
        copy_to_clipboard: bool = True,
    ) -> None:
        self._logger = logger or commit_gen_logger(__name__)
        self._clipboard_copy = clipboard_copy
        self._echo = echo
        self._echo_err = echo_err or (lambda message: self._echo(message, err=True))
        self._copy_to_clipboard = copy_to_clipboard
        self.commit_gen_service = commit_gen_service

    # --- Public API ---
    def run(self) -> int:
        self._logger.debug("Starting CLI controller run")
        diff = self.commit_gen_service.read_diff()

        if not diff:
            self._logger.warning("No diff detected")
            self._echo_err(NO_DIFF_MESSAGE)
            return 1

        self._echo("🤖 Generating commit message...")
        result = self.commit_gen_service.generate_commit(diff)

        if result.is_err():
            self._display_failure(result.failure)
            return 1

        self._display_commit(result.value)
        return 0

    # --- Private helpers ---
    def _display_failure(self, failure: FailureResponse) -> None:
        self._logger.debug("Displaying %s failure", failure.kind.value)
        self._echo_err(f"❌ {failure.message}")

    def _display_commit(self, commit_response: CommitMessageResponse) -> None:
        commit_msg = commit_response.message

        self._logger.debug("Displaying commit message")
        self._echo(commit_msg)

        if not self._copy_to_clipboard:
            return

        self._logger.debug("Copying commit message to clipboard")
        try:
            self._clipboard_copy(commit_msg)
        except pyperclip.PyperclipException as error:
            self._logger.warning("Clipboard unavailable: %s", error)
            self._echo_err("⚠️ Could not copy to clipboard. Copy the message manually.")
            return

        self._echo("\n✅ Commit message copied to clipboard.\n")
