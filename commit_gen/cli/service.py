import logging
import subprocess
import sys
from typing import Optional, TextIO, Sequence, Callable

from commit_gen.core.pipeline import CommitGenPipeline
from commit_gen.schemas import Result
from commit_gen.settings import commit_gen_logger


class CommitGenService:
    def __init__(
        self,
        pipeline: CommitGenPipeline,
        logger: Optional[logging.Logger] = None,
        stdin: TextIO = sys.stdin,
        run_process: Optional[
            Callable[[Sequence[str]], subprocess.CompletedProcess[str]]
        ] = None,
        isatty: Optional[Callable[[], bool]] = None,
    ) -> None:
        self._logger = logger or commit_gen_logger(__name__)
        self._stdin = stdin
        self._isatty = isatty or stdin.isatty
        self._run_process = run_process or self._default_run_process
        self.pipeline = pipeline

    # --- Public API ---
    def read_diff(self) -> str:
        if not self._isatty():
            self._logger.debug("Reading diff from stdin")
            return self._stdin.read().strip()

        diff_output = self._run_git_command(["git", "diff", "HEAD"])
        self._logger.debug("Diff length: %d", len(diff_output))
        return diff_output

    def generate_commit(self, diff: str) -> Result:
        self._logger.debug("Running commit generation pipeline")
        result = self.pipeline.run(diff)
        self._logger.debug("Pipeline finished (ok=%s)", result.is_ok())
        return result

    # --- Private helpers ---
    def _run_git_command(self, args: Sequence[str]) -> str:
        self._logger.debug("Running git command: %s", " ".join(args))
        result = self._run_process(args)
        if result.returncode != 0:
            stderr = result.stderr.strip() if result.stderr else ""
            self._logger.warning(
                "Git exited with code %s: %s", result.returncode, stderr
            )
        stdout = result.stdout.strip() if result.stdout else ""
        self._logger.debug("Git output length: %d", len(stdout))
        return stdout

    # --- Static helpers ---
    @staticmethod
    def _default_run_process(
        args: Sequence[str],
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.run(args, capture_output=True, text=True, check=False)
