import unittest

from taiji.core.constants import COLORS, Color
from taiji.core.exceptions import (
    EmptyPanelError,
    InvalidCharacterError,
    InvalidColorError,
    InvalidCountError,
    PanelLocParseError,
    TooManyPetalsError,
    TrailingBytesError,
)
from taiji.core.models import PLAIN, Line, Lozange, Panel, PanelLoc, Petals, Pips, symbol_color


def all_symbols():
    yield PLAIN
    for color in COLORS:
        yield Lozange(color=color)
        for diagonal in (False, True):
            yield Line(diagonal=diagonal, color=color)
        for count in list(range(-5, 10)) + [-128, 127]:
            yield Pips(count=count, color=color)
    for count in range(5):
        yield Petals(count=count)


class PanelTokenTests(unittest.TestCase):
    def test_every_panel_round_trips(self) -> None:
        for filled in (False, True):
            for fixed in (False, True):
                for symbol in all_symbols():
                    panel = Panel(filled=filled, fixed=fixed, symbol=symbol)
                    with self.subTest(panel=panel):
                        self.assertEqual(Panel.parse(str(panel)), panel)

    def test_token_layout(self) -> None:
        self.assertEqual(str(Panel()), ".")
        self.assertEqual(str(Panel(filled=True, fixed=True)), "X!")
        self.assertEqual(str(Panel(symbol=Pips(count=-3, color=Color.BLUE))), ".CU-3")
        self.assertEqual(str(Panel(filled=True, symbol=Line(diagonal=True, color=Color.GREEN))), "X/G")
        self.assertEqual(str(Panel(fixed=True, symbol=Lozange(color=Color.PURPLE))), ".!OP")
        self.assertEqual(str(Panel(symbol=Petals(count=2))), ".F2")

    def test_lower_case_input_is_accepted(self) -> None:
        panel = Panel.parse("x!cu3")
        self.assertEqual(panel, Panel(filled=True, fixed=True, symbol=Pips(count=3, color=Color.BLUE)))
        self.assertEqual(Panel.parse(".ob").symbol, Lozange(color=Color.BLACK))
        self.assertEqual(Panel.parse(".f4").symbol, Petals(count=4))
        self.assertEqual(Panel.parse(".-y").symbol, Line(diagonal=False, color=Color.YELLOW))

    def test_explicit_plus_sign_on_counts(self) -> None:
        self.assertEqual(Panel.parse(".CW+2").symbol, Pips(count=2, color=Color.WHITE))
        self.assertEqual(Panel.parse(".F+1").symbol, Petals(count=1))

    def test_empty_token(self) -> None:
        with self.assertRaises(EmptyPanelError):
            Panel.parse("")

    def test_bad_fill_character(self) -> None:
        with self.assertRaises(InvalidCharacterError) as ctx:
            Panel.parse("!.")
        self.assertEqual(ctx.exception.char, "!")

    def test_bad_symbol_character(self) -> None:
        with self.assertRaises(InvalidCharacterError) as ctx:
            Panel.parse(".Z")
        self.assertEqual(ctx.exception.char, "Z")

    def test_symbol_marker_without_color(self) -> None:
        with self.assertRaises(InvalidCharacterError):
            Panel.parse(".C")
        with self.assertRaises(InvalidCharacterError):
            Panel.parse(".-")

    def test_bad_color(self) -> None:
        with self.assertRaises(InvalidColorError) as ctx:
            Panel.parse(".CQ3")
        self.assertEqual(ctx.exception.char, "Q")

    def test_bad_counts(self) -> None:
        for token in (".CY", ".CY1x", ".CY200", ".F", ".F-1", ".CY 1"):
            with self.subTest(token=token):
                with self.assertRaises(InvalidCountError):
                    Panel.parse(token)

    def test_too_many_petals(self) -> None:
        with self.assertRaises(TooManyPetalsError) as ctx:
            Panel.parse(".F5")
        self.assertEqual(ctx.exception.count, 5)

    def test_trailing_bytes(self) -> None:
        with self.assertRaises(TrailingBytesError) as ctx:
            Panel.parse(".OPZ")
        self.assertEqual(ctx.exception.rest, "Z")
        with self.assertRaises(TrailingBytesError):
            Panel.parse("X!-UU")


class ColorTests(unittest.TestCase):
    def test_cycle_visits_every_color(self) -> None:
        color = Color.BLACK
        seen = []
        for _ in COLORS:
            seen.append(color)
            color = color.next()
        self.assertEqual(tuple(seen), COLORS)
        self.assertEqual(color, Color.BLACK)

    def test_prev_undoes_next(self) -> None:
        for color in COLORS:
            self.assertEqual(color.next().prev(), color)
        self.assertEqual(Color.BLACK.prev(), Color.GREEN)

    def test_complement(self) -> None:
        self.assertEqual(Color.BLACK.complement(), Color.WHITE)
        self.assertEqual(Color.YELLOW.complement(), Color.PURPLE)
        self.assertEqual(Color.PURPLE.complement(), Color.YELLOW)
        self.assertEqual(Color.BLUE.complement(), Color.PURPLE)
        self.assertEqual(Color.GREEN.complement(), Color.WHITE)

    def test_codes(self) -> None:
        self.assertEqual(Color.BLUE.code, "U")
        self.assertEqual(Color.from_code("u"), Color.BLUE)
        self.assertIsNone(Color.from_code("x"))


class SymbolEditTests(unittest.TestCase):
    def test_pip_counts_skip_zero(self) -> None:
        self.assertEqual(Pips(count=-1, color=Color.BLUE).incremented().count, 1)
        self.assertEqual(Pips(count=1, color=Color.BLUE).decremented().count, -1)
        self.assertEqual(Pips(count=2, color=Color.BLUE).incremented().count, 3)

    def test_petal_counts_are_clamped(self) -> None:
        self.assertEqual(Petals(count=4).incremented(), Petals(count=4))
        self.assertEqual(Petals(count=0).decremented(), Petals(count=0))
        self.assertEqual(Petals(count=1).with_count(9), Petals(count=4))
        self.assertEqual(Pips(count=1, color=Color.GREEN).with_count(9).count, 9)

    def test_other_symbols_ignore_counts(self) -> None:
        line = Line(diagonal=True, color=Color.WHITE)
        self.assertEqual(line.with_count(3), line)
        self.assertEqual(PLAIN.incremented(), PLAIN)

    def test_symbol_color(self) -> None:
        self.assertEqual(symbol_color(Lozange(color=Color.GREEN)), Color.GREEN)
        self.assertIsNone(symbol_color(Petals(count=1)))
        self.assertIsNone(symbol_color(PLAIN))

    def test_out_of_range_values_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Petals(count=5)
        with self.assertRaises(ValueError):
            Pips(count=200, color=Color.BLUE)


class PanelLocTests(unittest.TestCase):
    def test_display(self) -> None:
        self.assertEqual(str(PanelLoc(0, 0)), "1A")
        self.assertEqual(str(PanelLoc(11, 2)), "12C")

    def test_parse(self) -> None:
        self.assertEqual(PanelLoc.parse("12C"), PanelLoc(11, 2))
        self.assertEqual(PanelLoc.parse(str(PanelLoc(4, 7))), PanelLoc(4, 7))

    def test_parse_rejects_ill_formed(self) -> None:
        for text in ("", "A1", "1", "1AB", "0A", "1a", "A"):
            with self.subTest(text=text):
                with self.assertRaises(PanelLocParseError):
                    PanelLoc.parse(text)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
