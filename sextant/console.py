"""
Console collaborators handed to every command: a line-oriented Output sink and
an Input source.

Output
- Writes through a rich Console (stdout) and keeps a second one on stderr for
  error reporting. Styling follows the console's own color detection, so the
  same calls produce plain text when captured or piped.
- Blocks (write_error_block/write_info_block/write_success_block) are padded,
  styled paragraphs used for results and failures.
- progress() rewrites the current line in place; reset_progress() starts over.

Input
- get_line() reads one line (without its line break) from a text stream.
- yes_no() keeps asking until y/yes/n/no or an empty answer (the default).
"""
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.padding import Padding
from rich.pretty import Pretty
from rich.text import Text

from .utils import *


class Output:
    """
    Line-oriented output sink.

    Parameters
    - console: rich Console used for regular output (stdout by default).
    - stderr: rich Console used for error output (stderr by default).
    """

    def __init__(self, console=Unset, stderr=Unset):
        self._console = Console() if console is Unset else console
        self._stderr = Console(stderr=True) if stderr is Unset else stderr
        self._progress = 0

    @property
    def console(self):
        return self._console

    @property
    def error(self):
        return self._stderr

    def write(self, message, /, style=None):
        """
        Write a message without a trailing line break.
        """
        self._console.print(Text(str(message), style=style or ""), end="")
        return self

    def writeln(self, lines, /, style=None):
        """
        Write one line, or every line of an iterable, each with a line break.
        """
        if isinstance(lines, str | Text) or not isinstance(lines, Iterable):
            lines = [lines]
        for line in lines:
            self._console.print(line if isinstance(line, Text) else Text(str(line), style=style or ""))
        return self

    def newline(self, count=1, /):
        if not isinstance(count, int) or count < 1:
            raise ValueError("newline() count must be a positive integer")
        self._console.line(count)
        return self

    def write_block(self, lines, /, style="", *, stderr=False):
        """
        Write a padded block of lines in the given style.
        """
        if isinstance(lines, str | Text) or not isinstance(lines, Iterable):
            lines = [lines]
        text = Text("\n").join(line if isinstance(line, Text) else Text(str(line)) for line in lines)
        (self._stderr if stderr else self._console).print(Padding(text, (1, 2), style=style, expand=False))
        return self

    def write_error_block(self, lines, /):
        return self.write_block(lines, "bold white on red", stderr=True)

    def write_info_block(self, lines, /):
        return self.write_block(lines, "black on cyan")

    def write_success_block(self, lines, /):
        return self.write_block(lines, "black on green")

    def dump(self, object, /):
        """
        Pretty-print any object followed by a line break.
        """
        self._console.print(Pretty(object))
        return self

    def progress(self, message, /):
        """
        Show a progress message that replaces the previous one on the same line.
        """
        message = str(message)
        padding = " " * max(self._progress - len(message), 0)
        self._console.file.write(("\r" if self._progress else "") + message + padding)
        self._console.file.flush()
        self._progress = len(message)
        return self

    def reset_progress(self):
        self._progress = 0
        return self


class Input:
    """
    Line-oriented input source.

    Parameters
    - stream: text stream to read from (sys.stdin by default, looked up lazily).
    - output: Output used to show prompts (a default Output when omitted).
    """

    def __init__(self, stream=Unset, output=Unset):
        self._stream = stream
        self._output = Output() if output is Unset else output

    def get_line(self):
        """
        Read one line, without its trailing line break.

        Raises
        - EOFError: when the stream is exhausted.
        """
        line = coalesce(self._stream, sys.stdin).readline()
        if not line:
            raise EOFError("no more input to read")
        return line.rstrip("\r\n")

    def yes_no(self, question, /, default=True):
        """
        Ask a yes/no question until a valid answer is given.

        y/yes → True, n/no → False, an empty answer → `default`.
        """
        while True:
            self._output.write(question.strip() + (" [Y/n] " if default else " [y/N] "))
            answer = self.get_line().strip().lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            if not answer:
                return default
            self._output.writeln("Enter y/yes or n/no.")


__all__ = (
    "Output",
    "Input",
)
