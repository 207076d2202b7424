"""Colorized printer behavior tests.

Checks scoped color restoration and that disabled printers stay plain.
"""

from __future__ import annotations

import io
import unittest
from unittest import mock

from gridls.ansi import Color, FgColor, RESET, colorize
from gridls.printer import ERROR_COLOR, ColorizedPrinter, default_printer


class ColorizedPrinterTests(unittest.TestCase):
    def test_default_color_prints_plain_text(self) -> None:
        out = io.StringIO()
        ColorizedPrinter(stream=out).println("a", "b")
        self.assertEqual(out.getvalue(), "ab\n")

    def test_print_color_wraps_text_and_restores_previous_color(self) -> None:
        out = io.StringIO()
        printer = ColorizedPrinter(stream=out)
        blue = Color(FgColor.BLUE)
        printer.print_color(blue, "docs")
        printer.print("x")
        self.assertEqual(out.getvalue(), colorize("docs", blue) + "x")

    def test_using_color_restores_after_exception(self) -> None:
        printer = ColorizedPrinter(stream=io.StringIO())
        red = Color(FgColor.RED)
        with self.assertRaises(RuntimeError):
            with printer.using_color(red):
                self.assertEqual(printer.color, red)
                raise RuntimeError("boom")
        self.assertEqual(printer.color, Color())

    def test_disabled_printer_never_emits_escapes(self) -> None:
        out = io.StringIO()
        printer = default_printer(stream=out)
        printer.print_color(Color(FgColor.GREEN), "file")
        self.assertEqual(out.getvalue(), "file")
        self.assertNotIn("\033", out.getvalue())

    def test_print_error_uses_error_color_when_enabled(self) -> None:
        err = io.StringIO()
        printer = ColorizedPrinter(stream=io.StringIO(), error_stream=err)
        printer.print_error(OSError("denied"), "unable to read directory")
        self.assertEqual(err.getvalue(), colorize("unable to read directory: denied", ERROR_COLOR) + "\n")
        self.assertEqual(err.getvalue().count(RESET), 1)

    def test_print_error_is_plain_when_disabled(self) -> None:
        err = io.StringIO()
        printer = ColorizedPrinter(stream=io.StringIO(), enabled=False, error_stream=err)
        printer.print_error(None, "fatal")
        self.assertEqual(err.getvalue(), "fatal\n")

    def test_print_error_restores_active_color(self) -> None:
        blue = Color(FgColor.BLUE)
        printer = ColorizedPrinter(stream=io.StringIO(), color=blue, error_stream=io.StringIO())
        printer.print_error(None, "fatal")
        self.assertEqual(printer.color, blue)

    def test_print_error_restores_color_when_stream_fails(self) -> None:
        broken = mock.Mock()
        broken.write.side_effect = BrokenPipeError()
        printer = ColorizedPrinter(stream=io.StringIO(), error_stream=broken)
        with self.assertRaises(BrokenPipeError):
            printer.print_error(None, "fatal")
        self.assertEqual(printer.color, Color())


if __name__ == "__main__":
    unittest.main()
