"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes for the light and dark modes
- Theme variables (borders, scrollbars, etc.)

Both palettes are seeded from the same deep purple accent so toggling only
changes brightness.
"""

from textual.theme import Theme

GEMVOX_DARK = Theme(
    name="gemvox-dark",
    primary="#d0bcff",      # Purple 80 - main accent
    secondary="#ccc2dc",    # Neutral purple
    accent="#efb8c8",       # Rose - highlights
    foreground="#e6e1e5",
    background="#141218",
    success="#a6e3a1",
    warning="#fab387",
    error="#f2b8b5",
    surface="#1d1b20",
    panel="#211f26",
    dark=True,
    variables={
        "border": "#49454f",
        "border-blurred": "#322f35",
        "scrollbar": "#322f35",
        "scrollbar-hover": "#49454f",
        "scrollbar-active": "#d0bcff",
        "footer-key-foreground": "#efb8c8",
        "input-selection-background": "#d0bcff 30%",
        "text-muted": "#938f99",
    },
)

GEMVOX_LIGHT = Theme(
    name="gemvox-light",
    primary="#6750a4",      # Purple 40 - main accent
    secondary="#625b71",
    accent="#7d5260",
    foreground="#1d1b20",
    background="#fef7ff",
    success="#386a20",
    warning="#8b5000",
    error="#b3261e",
    surface="#f7f2fa",
    panel="#f3edf7",
    dark=False,
    variables={
        "border": "#cac4d0",
        "border-blurred": "#e7e0ec",
        "scrollbar": "#e7e0ec",
        "scrollbar-hover": "#cac4d0",
        "scrollbar-active": "#6750a4",
        "footer-key-foreground": "#7d5260",
        "input-selection-background": "#6750a4 25%",
        "text-muted": "#79747e",
    },
)


def theme_name(is_dark_mode: bool) -> str:
    """Map the persisted dark-mode flag to a registered theme name."""
    return GEMVOX_DARK.name if is_dark_mode else GEMVOX_LIGHT.name
