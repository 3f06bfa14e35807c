"""Default light theme."""

from sdl_layout.render.style import ColorSet, Theme

DEFAULT_THEME = Theme(
    name="default",
    background_color="#ffffff",
    colors={
        "blue": ColorSet("#e8f1ff", "#2f6fd6", "#1a3f7a"),
        "green": ColorSet("#e6f6ea", "#2a9d4b", "#17602c"),
        "red": ColorSet("#fdecec", "#d93f3f", "#8a1f1f"),
        "orange": ColorSet("#fff1e6", "#d9731f", "#8a4210"),
        "yellow": ColorSet("#fff8e1", "#c29100", "#6e5200"),
        "purple": ColorSet("#f3ecff", "#8250df", "#4c2a8a"),
        "teal": ColorSet("#e3f8f5", "#14a393", "#0b5e55"),
        "gray": ColorSet("#f4f5f7", "#6e7781", "#24292f"),
        "pink": ColorSet("#ffeef6", "#d6337c", "#7d1a48"),
    },
    font_family="'IBM Plex Sans', system-ui, sans-serif",
    font_mono="'IBM Plex Mono', monospace",
    title_color="#111111",
)
