"""
Stable per-series colours.

Every experience gets a palette entry chosen by a digest of its identifier, so
the same series is painted the same way on every render, in every process.
The theme is always passed in explicitly.
"""

import hashlib
from dataclasses import dataclass

from .types import THEME_DARK, THEME_LIGHT


@dataclass(frozen=True)
class ThemedColors:
    solid: str
    text: str
    ghost: str
    border: str


@dataclass(frozen=True)
class PaletteEntry:
    name: str
    bg_solid: str
    text_solid: str
    bg_ghost: str
    border: str
    dark_bg_solid: str
    dark_text_solid: str
    dark_bg_ghost: str
    dark_border: str

    def for_theme(self, theme=THEME_LIGHT):
        if theme == THEME_DARK:
            return ThemedColors(
                solid=self.dark_bg_solid,
                text=self.dark_text_solid,
                ghost=self.dark_bg_ghost,
                border=self.dark_border,
            )
        return ThemedColors(
            solid=self.bg_solid,
            text=self.text_solid,
            ghost=self.bg_ghost,
            border=self.border,
        )

    def as_dict(self, theme=THEME_LIGHT):
        colors = self.for_theme(theme)
        return {
            'name': self.name,
            'solid': colors.solid,
            'text': colors.text,
            'ghost': colors.ghost,
            'border': colors.border,
        }


# Order is part of the contract: reordering recolours every series.
PALETTE = (
    PaletteEntry('teal', '#ccfbf1', '#115e59', '#f0fdfa', '#0d9488',
                 '#134e4a', '#ccfbf1', '#042f2e', '#2dd4bf'),
    PaletteEntry('sky', '#e0f2fe', '#075985', '#f0f9ff', '#0284c7',
                 '#0c4a6e', '#e0f2fe', '#082f49', '#38bdf8'),
    PaletteEntry('indigo', '#e0e7ff', '#3730a3', '#eef2ff', '#4f46e5',
                 '#312e81', '#e0e7ff', '#1e1b4b', '#818cf8'),
    PaletteEntry('violet', '#ede9fe', '#5b21b6', '#f5f3ff', '#7c3aed',
                 '#4c1d95', '#ede9fe', '#2e1065', '#a78bfa'),
    PaletteEntry('fuchsia', '#fae8ff', '#86198f', '#fdf4ff', '#c026d3',
                 '#701a75', '#fae8ff', '#4a044e', '#e879f9'),
    PaletteEntry('rose', '#ffe4e6', '#9f1239', '#fff1f2', '#e11d48',
                 '#881337', '#ffe4e6', '#4c0519', '#fb7185'),
    PaletteEntry('orange', '#ffedd5', '#9a3412', '#fff7ed', '#ea580c',
                 '#7c2d12', '#ffedd5', '#431407', '#fb923c'),
    PaletteEntry('amber', '#fef3c7', '#92400e', '#fffbeb', '#d97706',
                 '#78350f', '#fef3c7', '#451a03', '#fbbf24'),
    PaletteEntry('lime', '#ecfccb', '#3f6212', '#f7fee7', '#65a30d',
                 '#365314', '#ecfccb', '#1a2e05', '#a3e635'),
    PaletteEntry('emerald', '#d1fae5', '#065f46', '#ecfdf5', '#059669',
                 '#064e3b', '#d1fae5', '#022c22', '#34d399'),
    PaletteEntry('cyan', '#cffafe', '#155e75', '#ecfeff', '#0891b2',
                 '#164e63', '#cffafe', '#083344', '#22d3ee'),
    PaletteEntry('slate', '#e2e8f0', '#1e293b', '#f8fafc', '#475569',
                 '#1e293b', '#e2e8f0', '#0f172a', '#94a3b8'),
)


def _stable_index(identifier, size):
    digest = hashlib.sha256(str(identifier).encode('utf-8')).digest()
    return int.from_bytes(digest[:8], 'big') % size


def color_for(identifier):
    """Return the palette entry for a series identifier."""
    return PALETTE[_stable_index(identifier, len(PALETTE))]
