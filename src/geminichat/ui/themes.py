"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Dark theme built around the Gemini blue/violet gradient
GEMINI_NIGHT = Theme(
    name="gemini-night",
    primary="#4c8df6",      # Blue - main accent, user entries
    secondary="#9b72cb",    # Violet - model entries
    accent="#d96570",       # Rose - highlights
    foreground="#e3e3e3",
    background="#131314",
    success="#6dd58c",
    warning="#f4b400",
    error="#f28b82",
    surface="#1e1f20",
    panel="#18191a",
    dark=True,
    variables={
        "block-cursor-foreground": "#131314",
        "block-cursor-background": "#a8c7fa",
        "block-cursor-text-style": "bold",
        "input-cursor-background": "#e3e3e3",
        "input-cursor-foreground": "#131314",
        "input-selection-background": "#4c8df6 30%",
        "border": "#444746",
        "border-blurred": "#2d2f31",
        "scrollbar": "#2d2f31",
        "scrollbar-hover": "#444746",
        "scrollbar-active": "#4c8df6",
        "scrollbar-background": "#18191a",
        "footer-foreground": "#c4c7c5",
        "footer-background": "#131314",
        "footer-key-foreground": "#a8c7fa",
        "footer-key-background": "#2d2f31",
        "text-muted": "#8e918f",
        "text-disabled": "#5f6368",
    },
)
