"""
Interactive query collection.

Reads lines from a line editor until the accumulated text parses as a
complete SPARQL query. The PREFIX header of the registry is shown as the
prompt of the first line so the user knows which prefixes are available.
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory

from sparqlite.prefixes.registry import PrefixRegistry
from sparqlite.sparql.validator import ValidationState, validate

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str]


class SessionState(Enum):
    """States of one query collection."""
    COLLECTING = "collecting"
    COMPLETE = "complete"
    ABORTED = "aborted"


def create_line_reader(history_file: Optional[Union[str, Path]] = None) -> ReadLine:
    """prompt_toolkit line editor, with persistent history when a file is given."""
    history = FileHistory(str(history_file)) if history_file else InMemoryHistory()
    return PromptSession(history=history).prompt


class QuerySession:
    """
    Collects one complete query per ``read_query`` call.

    The line editor is any callable taking a prompt and returning one line.
    It signals end of input or an interrupt by raising EOFError or
    KeyboardInterrupt, as prompt_toolkit does.

    Usage:
        session = QuerySession(registry)
        query = session.read_query()
        if query is None:
            ...  # user quit
    """

    def __init__(
        self,
        registry: PrefixRegistry,
        read_line: Optional[ReadLine] = None,
        continuation_prompt: str = "",
    ):
        self.registry = registry
        self.read_line = read_line if read_line is not None else create_line_reader()
        self.continuation_prompt = continuation_prompt
        self.state = SessionState.COLLECTING
        self.lines: List[str] = []

    @property
    def buffer(self) -> str:
        return "\n".join(self.lines)

    def read_query(self) -> Optional[str]:
        """
        Prompt until the input is a complete query.

        Returns:
            The query text, or None if the editor failed or input ended
            before the query was complete
        """
        self.state = SessionState.COLLECTING
        self.lines = []
        prompt = self.registry.format_for_query()

        while self.state is SessionState.COLLECTING:
            try:
                line = self.read_line(prompt)
            except (EOFError, KeyboardInterrupt, OSError) as e:
                logger.debug(f"Line editor stopped: {type(e).__name__}")
                self.state = SessionState.ABORTED
                break

            self.lines.append(line)
            if validate(self.buffer) is ValidationState.VALID:
                self.state = SessionState.COMPLETE
            else:
                prompt = self.continuation_prompt

        if self.state is SessionState.ABORTED:
            return None
        return self.buffer
