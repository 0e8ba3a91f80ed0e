"""
Theme colors.

Theme keywords are free text. Lookup is a case-insensitive substring match
over an ordered list of rules; the first rule with a matching substring
wins, and anything else gets the default dark grey.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ThemeRule:
    """Substrings that select a base color for a theme."""

    keywords: Tuple[str, ...]
    color: Tuple[int, int, int]
    description: str

    def matches(self, theme: str) -> bool:
        lowered = theme.lower()
        return any(keyword in lowered for keyword in self.keywords)


THEME_RULES: Tuple[ThemeRule, ...] = (
    ThemeRule(("star", "wars", "space"), (20, 20, 20), "dark black or very dark grey"),
    ThemeRule(("horror", "zombie", "dark"), (80, 10, 10), "dark red or deep crimson"),
    ThemeRule(("cyberpunk", "neon"), (30, 20, 60), "dark blue or dark purple"),
    ThemeRule(("medieval", "fantasy"), (60, 40, 20), "dark brown or dark green"),
    ThemeRule(("apocalyptic", "wasteland"), (50, 40, 30), "dark brown or dark grey"),
)

DEFAULT_THEME_COLOR = (40, 40, 40)
DEFAULT_THEME_DESCRIPTION = "dark grey or dark black"

# Themes recognised in free-text game descriptions, checked in order
MULTI_WORD_THEMES = (
    (("star wars", "starwars"), "star wars"),
    (("horror",), "horror"),
)
SINGLE_WORD_THEMES = (
    "cyberpunk",
    "medieval",
    "fantasy",
    "sci-fi",
    "space",
    "western",
    "steampunk",
    "post-apocalyptic",
    "zombie",
    "viking",
    "samurai",
    "ninja",
)


def find_theme_rule(theme: Optional[str]) -> Optional[ThemeRule]:
    if not theme:
        return None
    for rule in THEME_RULES:
        if rule.matches(theme):
            return rule
    return None


def theme_color(theme: Optional[str]) -> Tuple[int, int, int]:
    """Base RGB color for a theme keyword."""
    rule = find_theme_rule(theme)
    return rule.color if rule else DEFAULT_THEME_COLOR


def theme_description(theme: Optional[str]) -> str:
    """Human-readable color family for a theme keyword."""
    rule = find_theme_rule(theme)
    if rule:
        return rule.description
    return "dark grey" if not theme else DEFAULT_THEME_DESCRIPTION


def extract_theme(text: str) -> Optional[str]:
    """Pull a theme keyword out of a free-text game description."""
    lowered = text.lower()

    for phrases, theme in MULTI_WORD_THEMES:
        if any(phrase in lowered for phrase in phrases):
            return theme

    for theme in SINGLE_WORD_THEMES:
        if theme in lowered:
            return theme
    return None
