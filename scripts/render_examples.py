#!/usr/bin/env python3
"""Batch render every SDL example directory to SVG.

Outputs go to /tmp/sdl_layout_renders/ unless --output-dir is given.
Saved layouts are ignored so the renders show the computed layout.

Usage:
    python scripts/render_examples.py [--theme dark]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from sdl_layout.layout import compute_layout  # noqa: E402
from sdl_layout.parser import SdlParseError, load_example_dir, validate_graph  # noqa: E402
from sdl_layout.render import render_svg  # noqa: E402
from sdl_layout.themes import THEMES  # noqa: E402

OUTPUT_DIR = Path("/tmp/sdl_layout_renders")
EXAMPLES_DIR = project_root / "examples"


def render_example(
    example_dir: Path, output_dir: Path, theme_name: str
) -> tuple[str, list[str]]:
    """Load, lay out, and render one example directory.

    Returns (name, list_of_issues).
    """
    name = example_dir.name
    try:
        graph = load_example_dir(example_dir)
    except SdlParseError as e:
        return name, [f"PARSE ERROR: {e}"]

    issues = validate_graph(graph)
    layout = compute_layout(graph)
    if layout.ordering.crossings:
        issues.append(f"{layout.ordering.crossings} edge crossings remain")

    svg_str = render_svg(graph, THEMES[theme_name], layout=layout)
    (output_dir / f"{name}.svg").write_text(svg_str + "\n")
    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Batch render SDL examples")
    parser.add_argument("--theme", choices=sorted(THEMES), default="default")
    parser.add_argument("--output-dir", type=Path, default=OUTPUT_DIR)
    args = parser.parse_args()

    args.output_dir.mkdir(parents=True, exist_ok=True)

    example_dirs = sorted(
        p for p in EXAMPLES_DIR.iterdir() if (p / "nodes.json").exists()
    )
    if not example_dirs:
        print(f"No examples found in {EXAMPLES_DIR}")
        sys.exit(1)

    print(f"Rendering {len(example_dirs)} examples to {args.output_dir}/")
    print()

    max_name_len = max(len(p.name) for p in example_dirs)
    any_errors = False

    for example_dir in example_dirs:
        name, issues = render_example(example_dir, args.output_dir, args.theme)
        status = "OK" if not issues else "ISSUES"
        if any("ERROR" in i for i in issues):
            status = "FAIL"
            any_errors = True

        print(f"  {name:<{max_name_len}}  [{status}]")
        for issue in issues:
            print(f"    - {issue}")

    print(f"\nOutputs in: {args.output_dir}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
