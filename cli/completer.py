"""Custom completer for the upzload CLI with local file autocompletion."""

from pathlib import Path
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS


class UpzloadCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Local file path completion for the 'upload' command
    """

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        if tokens[0].lower() != "upload":
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        already_typed = set(tokens[1:])
        if not is_typing_new_token:
            already_typed.discard(current_word)

        yield from self._complete_local_files(current_word, already_typed)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_local_files(
        self, partial: str, exclude: set
    ) -> Iterable[Completion]:
        """
        Complete paths relative to the current working directory.

        Directories are offered with a trailing slash so the user can
        descend into them; hidden entries only show up once the partial
        name starts with a dot.
        """
        head, _, prefix = partial.rpartition("/")
        base = Path.cwd() / head if head else Path.cwd()
        if head == "" and partial.startswith("/"):
            base = Path("/")

        if not base.is_dir():
            return

        entries = []
        for item in base.iterdir():
            if item.name.startswith(".") and not prefix.startswith("."):
                continue
            if not item.name.startswith(prefix):
                continue
            candidate = f"{head}/{item.name}" if head or partial.startswith("/") else item.name
            if item.is_dir():
                candidate += "/"
            elif candidate in exclude:
                continue
            entries.append(candidate)

        for candidate in sorted(entries):
            yield Completion(candidate, start_position=-len(partial))
