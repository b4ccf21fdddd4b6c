"""
Interactive selection prompts for grab.

The Selector is the only place that talks to the terminal prompt library. It
offers two operations: choosing one entry of a rendered list (or cancelling),
and asking a yes/no question with a default answer.
"""

from typing import List, Optional, TextIO
import logging

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.text import Text

from ..models.descriptor import FileDescriptor


logger = logging.getLogger(__name__)


SELECT_TITLE = "Select a file to move:"
SELECT_HELP = "Enter a number to select, press Enter to cancel"
CANCEL_ANSWERS = {'', 'q', 'quit'}


class SelectionCancelled(Exception):
    """Raised when the user leaves the selection prompt without choosing."""
    pass


class Selector:
    """
    Terminal prompts backed by rich.

    Args:
        console: Console to render on (defaults to a new stdout console)
        stream: Input stream to read answers from (defaults to stdin)
    """

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.console = console or Console()
        self.stream = stream

    def choose(self, descriptors: List[FileDescriptor]) -> FileDescriptor:
        """
        Show the list and return the chosen descriptor.

        Raises:
            SelectionCancelled: On empty input, 'q', end of input or interrupt
        """
        if not descriptors:
            raise SelectionCancelled("Nothing to select")

        self.console.print(SELECT_TITLE, style="bold", markup=False, highlight=False)
        index_width = len(str(len(descriptors)))
        for number, descriptor in enumerate(descriptors, start=1):
            line = Text(f"{number:>{index_width}}) ", style="cyan")
            line.append(descriptor.render())
            self.console.print(line, highlight=False)
        self.console.print(SELECT_HELP, style="dim", markup=False, highlight=False)

        while True:
            try:
                answer = Prompt.ask(
                    ">",
                    console=self.console,
                    default="",
                    show_default=False,
                    stream=self.stream
                )
            except (KeyboardInterrupt, EOFError) as e:
                raise SelectionCancelled("Selection interrupted") from e

            answer = answer.strip().lower()
            if answer in CANCEL_ANSWERS:
                raise SelectionCancelled("No entry chosen")

            if answer.isdigit() and 1 <= int(answer) <= len(descriptors):
                chosen = descriptors[int(answer) - 1]
                logger.debug(f"Selected {chosen.path}")
                self.console.print(chosen.name, markup=False, highlight=False)
                return chosen

            self.console.print(
                f"Please enter a number between 1 and {len(descriptors)}",
                style="prompt.invalid",
                markup=False,
                highlight=False
            )

    def confirm(self, question: str, default: bool = False) -> bool:
        """
        Ask a yes/no question.

        An interrupt or end of input answers with the default.
        """
        try:
            return Confirm.ask(question, console=self.console, default=default, stream=self.stream)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return default
