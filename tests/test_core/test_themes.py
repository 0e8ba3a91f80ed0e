"""Tests for theme colors and theme extraction."""

import pytest

from spritekit.core.themes import (
    DEFAULT_THEME_COLOR,
    DEFAULT_THEME_DESCRIPTION,
    extract_theme,
    theme_color,
    theme_description,
)


class TestThemeColor:
    """Tests for theme_color()."""

    @pytest.mark.parametrize("theme,color", [
        ("star wars", (20, 20, 20)),
        ("Deep Space", (20, 20, 20)),
        ("horror", (80, 10, 10)),
        ("ZOMBIE outbreak", (80, 10, 10)),
        ("cyberpunk", (30, 20, 60)),
        ("neon city", (30, 20, 60)),
        ("medieval", (60, 40, 20)),
        ("high fantasy", (60, 40, 20)),
        ("post-apocalyptic", (50, 40, 30)),
        ("wasteland", (50, 40, 30)),
    ])
    def test_known_themes(self, theme, color):
        assert theme_color(theme) == color

    def test_first_rule_wins(self):
        """'dark' belongs to the horror rule, which is checked before fantasy."""
        assert theme_color("dark fantasy") == (80, 10, 10)

    @pytest.mark.parametrize("theme", [None, "", "western", "pirates"])
    def test_default(self, theme):
        assert theme_color(theme) == DEFAULT_THEME_COLOR


class TestThemeDescription:
    """Tests for theme_description()."""

    def test_known(self):
        assert theme_description("horror") == "dark red or deep crimson"

    def test_unknown(self):
        assert theme_description("western") == DEFAULT_THEME_DESCRIPTION

    def test_missing(self):
        assert theme_description(None) == "dark grey"
        assert theme_description("") == "dark grey"


class TestExtractTheme:
    """Tests for extract_theme()."""

    @pytest.mark.parametrize("text,theme", [
        ("A Star Wars inspired shooter", "star wars"),
        ("starwars fan game", "star wars"),
        ("A horror game set in space", "horror"),
        ("Cyberpunk racing", "cyberpunk"),
        ("a post-apocalyptic road trip", "post-apocalyptic"),
        ("Ninja platformer", "ninja"),
    ])
    def test_extract(self, text, theme):
        assert extract_theme(text) == theme

    def test_no_theme(self):
        assert extract_theme("a simple puzzle game") is None
