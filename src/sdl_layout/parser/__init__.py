"""Graph model and JSON loading for SDL example directories."""

from sdl_layout.parser.loader import (
    SdlParseError,
    load_example_dir,
    parse_sdl,
    validate_graph,
)

__all__ = ["SdlParseError", "load_example_dir", "parse_sdl", "validate_graph"]
