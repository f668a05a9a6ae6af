import sys
from typing import Optional

import click

from commit_gen.settings import set_commit_gen_log_level
from commit_gen.core.pipeline import CommitGenPipeline
from commit_gen.errors import ApiKeyMissingError

from .service import CommitGenService
from .controller import CommitGenController


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--no-copy", is_flag=True, help="Do not copy the message to the clipboard")
@click.option("--chunk-model", default=None, help="Model used to summarize each diff chunk")
@click.option("--fusion-model", default=None, help="Model used to write the final message")
def run_commit_gen(
    debug: bool,
    no_copy: bool = False,
    chunk_model: Optional[str] = None,
    fusion_model: Optional[str] = None,
):
    """Generate a commit message from `git diff HEAD` or a piped diff.

    \b
    Usage:
      commit-gen
      git diff --staged | commit-gen --no-copy

    Environment:
      Provide a GROQ_API_KEY via environment variable or a .env file.
    """
    if debug:
        set_commit_gen_log_level("DEBUG")

    try:
        pipeline = CommitGenPipeline.from_env(
            chunk_model=chunk_model, fusion_model=fusion_model
        )
    except ApiKeyMissingError as error:
        raise click.ClickException(str(error)) from error

    service = CommitGenService(pipeline=pipeline)
    controller = CommitGenController(service, copy_to_clipboard=not no_copy)

    sys.exit(controller.run())


if __name__ == "__main__":
    run_commit_gen()
