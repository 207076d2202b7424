"""ANSI color values and escape-sequence formatting.

A ``Color`` is an immutable foreground/background/style triple. ``colorize``
wraps text in one SGR sequence and a trailing reset, so callers can mix
colored and plain segments on the same line without tracking state.
"""

from __future__ import annotations

import enum
import re
import unicodedata
from dataclasses import dataclass, replace

ESC = "\033"
RESET = f"{ESC}[0m"
ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")

_BOLD_ON, _BOLD_OFF = 1, 22
_ITALIC_ON, _ITALIC_OFF = 3, 23
_UNDERLINE_ON, _UNDERLINE_OFF = 4, 24


class FgColor(enum.IntEnum):
    """SGR foreground codes; one slot is skipped before the default."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    PURPLE = 35
    CYAN = 36
    WHITE = 37
    DEFAULT = 39


class BgColor(enum.IntEnum):
    """SGR background codes mirroring ``FgColor`` offset by ten."""

    BLACK = 40
    RED = 41
    GREEN = 42
    YELLOW = 43
    BLUE = 44
    PURPLE = 45
    CYAN = 46
    WHITE = 47
    DEFAULT = 49


class TextModifier(enum.IntFlag):
    """Style bitmask. ``DEFAULT_TEXT`` names no flag and cannot be toggled."""

    DEFAULT_TEXT = 0
    ITALIC = 1 << 1
    BOLD = 1 << 2
    UNDERLINE = 1 << 3


class InvalidModifierError(ValueError):
    """Raised for ``DEFAULT_TEXT`` or bits that name no style flag."""


_STYLE_FLAGS = TextModifier.ITALIC | TextModifier.BOLD | TextModifier.UNDERLINE


def _decode_mask(modifiers: TextModifier | int) -> TextModifier:
    value = int(modifiers)
    if value & ~int(_STYLE_FLAGS):
        raise InvalidModifierError(f"text modifier mask {value:#x} has bits outside ITALIC|BOLD|UNDERLINE")
    return TextModifier(value)


def _require_modifier(modifiers: TextModifier | int, action: str) -> TextModifier:
    mask = _decode_mask(modifiers)
    if mask == TextModifier.DEFAULT_TEXT:
        raise InvalidModifierError(f"unable to {action} text modifier: modifier DEFAULT_TEXT is not valid")
    return mask


@dataclass(frozen=True)
class Color:
    """Foreground, background, and bold/italic/underline flags."""

    foreground: FgColor = FgColor.DEFAULT
    background: BgColor = BgColor.DEFAULT
    bold: bool = False
    italic: bool = False
    underline: bool = False

    def __post_init__(self) -> None:
        # Coerce plain ints so unknown codes fail here and never reach ``colorize``.
        object.__setattr__(self, "foreground", FgColor(self.foreground))
        object.__setattr__(self, "background", BgColor(self.background))
        for flag in ("bold", "italic", "underline"):
            if not isinstance(getattr(self, flag), bool):
                raise TypeError(f"{flag} must be a bool")

    @classmethod
    def from_modifiers(
        cls,
        foreground: FgColor | int = FgColor.DEFAULT,
        background: BgColor | int = BgColor.DEFAULT,
        modifiers: TextModifier | int = TextModifier.DEFAULT_TEXT,
    ) -> Color:
        """Build a color whose flags are decoded from a ``TextModifier`` mask."""
        mask = _decode_mask(modifiers)
        return cls(
            foreground=FgColor(foreground),
            background=BgColor(background),
            bold=bool(mask & TextModifier.BOLD),
            italic=bool(mask & TextModifier.ITALIC),
            underline=bool(mask & TextModifier.UNDERLINE),
        )

    def with_styles_added(self, modifiers: TextModifier | int) -> Color:
        """Return a copy with every flag named in ``modifiers`` set.

        Raises ``InvalidModifierError`` for ``DEFAULT_TEXT`` or unnamed bits.
        """
        mask = _require_modifier(modifiers, "add")
        return replace(
            self,
            bold=self.bold or bool(mask & TextModifier.BOLD),
            italic=self.italic or bool(mask & TextModifier.ITALIC),
            underline=self.underline or bool(mask & TextModifier.UNDERLINE),
        )

    def with_styles_cleared(self, modifiers: TextModifier | int) -> Color:
        """Return a copy with every flag named in ``modifiers`` cleared.

        Raises ``InvalidModifierError`` for ``DEFAULT_TEXT`` or unnamed bits.
        """
        mask = _require_modifier(modifiers, "clear")
        return replace(
            self,
            bold=self.bold and not (mask & TextModifier.BOLD),
            italic=self.italic and not (mask & TextModifier.ITALIC),
            underline=self.underline and not (mask & TextModifier.UNDERLINE),
        )

    def with_all_styles_cleared(self) -> Color:
        return replace(self, bold=False, italic=False, underline=False)

    def sgr_sequence(self) -> str:
        """Return the opening escape sequence for this color."""
        return "{esc}[{fg};{bg};{bold};{italic};{underline}m".format(
            esc=ESC,
            fg=int(self.foreground),
            bg=int(self.background),
            bold=_BOLD_ON if self.bold else _BOLD_OFF,
            italic=_ITALIC_ON if self.italic else _ITALIC_OFF,
            underline=_UNDERLINE_ON if self.underline else _UNDERLINE_OFF,
        )


DEFAULT_COLOR = Color()


def add_styles(color: Color, modifiers: TextModifier | int) -> Color:
    """Functional form of ``Color.with_styles_added``."""
    return color.with_styles_added(modifiers)


def clear_styles(color: Color, modifiers: TextModifier | int) -> Color:
    """Functional form of ``Color.with_styles_cleared``."""
    return color.with_styles_cleared(modifiers)


def clear_all_styles(color: Color) -> Color:
    return color.with_all_styles_cleared()


def colorize(text: str, color: Color) -> str:
    """Wrap ``text`` in ``color``'s SGR sequence followed by a single reset."""
    return f"{color.sgr_sequence()}{text}{RESET}"


def strip_ansi(text: str) -> str:
    """Remove escape sequences, leaving only printable text."""
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return visible column width of ``text``, ignoring escape sequences."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def pad_to_width(text: str, width: int) -> str:
    """Right-pad ``text`` with spaces to ``width`` visible columns."""
    return text + " " * max(0, width - display_width(text))
