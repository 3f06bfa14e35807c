"""Dark theme (GitHub-dark palette)."""

from sdl_layout.render.style import ColorSet, Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#0d1117",
    colors={
        "blue": ColorSet("#1a2d4a", "#58a6ff", "#a5c8ff"),
        "green": ColorSet("#1a3a2a", "#3fb950", "#7ee787"),
        "red": ColorSet("#3a1a1a", "#f85149", "#ffa198"),
        "orange": ColorSet("#3a2210", "#e3804a", "#ffa657"),
        "yellow": ColorSet("#2e2510", "#d29922", "#e3b341"),
        "purple": ColorSet("#2a1a3a", "#bc8cff", "#d2a8ff"),
        "teal": ColorSet("#0f2a28", "#2dd4bf", "#5eead4"),
        "gray": ColorSet("#1c2128", "#7d8590", "#c9d1d9"),
        "pink": ColorSet("#3a1528", "#f778ba", "#ff9ed2"),
    },
    font_family="'IBM Plex Sans', system-ui, sans-serif",
    font_mono="'IBM Plex Mono', monospace",
    title_color="#e6edf3",
)
