"""Colorized output stream wrapper.

The printer holds one active color. ``using_color`` swaps it for the duration
of a ``with`` block and always restores the previous color on exit.
"""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Iterator
from typing import TextIO

from .ansi import DEFAULT_COLOR, Color, FgColor, TextModifier, colorize

ERROR_COLOR = Color.from_modifiers(FgColor.RED, modifiers=TextModifier.BOLD)


class ColorizedPrinter:
    def __init__(
        self,
        stream: TextIO | None = None,
        color: Color = DEFAULT_COLOR,
        enabled: bool = True,
        error_stream: TextIO | None = None,
    ) -> None:
        self._stream = stream
        self._error_stream = error_stream
        self.color = color
        self.enabled = enabled

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so patched ``sys.stdout`` is honored.
        return self._stream if self._stream is not None else sys.stdout

    @property
    def error_stream(self) -> TextIO:
        return self._error_stream if self._error_stream is not None else sys.stderr

    def format(self, text: str, color: Color | None = None) -> str:
        """Return ``text`` styled with ``color`` (or the active color).

        Disabled printers and the default color produce plain text.
        """
        active = self.color if color is None else color
        if not self.enabled or active == DEFAULT_COLOR:
            return text
        return colorize(text, active)

    def write(self, text: str) -> None:
        """Write pre-rendered text verbatim."""
        self.stream.write(text)

    def print(self, *parts: object) -> None:
        self.write(self.format("".join(str(part) for part in parts)))

    def println(self, *parts: object) -> None:
        self.write(self.format("".join(str(part) for part in parts)) + "\n")

    def print_color(self, color: Color, *parts: object) -> None:
        with self.using_color(color):
            self.print(*parts)

    @contextlib.contextmanager
    def using_color(self, color: Color) -> Iterator[ColorizedPrinter]:
        """Temporarily make ``color`` the active color."""
        previous = self.color
        self.color = color
        try:
            yield self
        finally:
            self.color = previous

    def print_error(self, exc: BaseException | None, message: str) -> None:
        """Report a fatal error on the error stream.

        The line is ``message: exc`` (or just ``message``), styled with
        ``ERROR_COLOR`` when color output is enabled.
        """
        text = message if exc is None else f"{message}: {exc}"
        with self.using_color(ERROR_COLOR):
            self.error_stream.write(self.format(text) + "\n")
        self.error_stream.flush()


def default_printer(stream: TextIO | None = None) -> ColorizedPrinter:
    """Return a printer that never emits escape sequences."""
    return ColorizedPrinter(stream=stream, enabled=False)
