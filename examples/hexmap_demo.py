#!/usr/bin/env python3
"""
Demo script rendering a generated hex map with matplotlib.

Usage:
    python examples/hexmap_demo.py [--preset NAME] [--seed N] [--width W] [--height H]
"""

import argparse

import matplotlib.pyplot as plt
from matplotlib.patches import RegularPolygon, Rectangle

from py_hexmap.config import TERRAIN_NAMES, get_settings, list_presets
from py_hexmap.core import HexMapGenerator, MapConfig, WaterPlaneKind
from py_hexmap.utils.logging_config import configure_logging


def draw_map(generator: HexMapGenerator, output: str):
    """Draw tiles as hexagons colored by height and outline the water planes."""
    snapshot = generator.snapshot
    radius = generator.cell_size / 3 ** 0.5

    fig, ax = plt.subplots(figsize=(12, 10))
    for tile in snapshot.grid:
        x, _, z = tile.position
        ax.add_patch(RegularPolygon((x, z), numVertices=6, radius=radius,
                                    facecolor=tile.color[:3], edgecolor="none"))

    outline = {WaterPlaneKind.MAIN: "tab:blue", WaterPlaneKind.EDGE: "tab:cyan",
               WaterPlaneKind.CORNER: "tab:purple"}
    for plane in snapshot.water_planes:
        ax.add_patch(Rectangle(plane.min_xz, plane.width, plane.length, fill=False,
                               edgecolor=outline[plane.kind], linewidth=0.8, alpha=0.6))

    ax.autoscale_view()
    ax.set_aspect("equal")
    ax.set_title(f"seed {snapshot.config.seed} - {len(snapshot.chunks)} chunks")
    plt.savefig(output, dpi=150)
    print(f"\nSaved visualization to {output}")


def main():
    parser = argparse.ArgumentParser(description="Generate and render a hex map")
    parser.add_argument("--preset", default=None, choices=list_presets())
    parser.add_argument("--seed", type=int, default=None, help="Map seed (random if omitted)")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--output", default="hexmap.png")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)

    overrides = {k: v for k, v in (("width", args.width), ("height", args.height)) if v}
    generator = HexMapGenerator(MapConfig.from_settings(settings, preset=args.preset, **overrides))
    if args.seed is None:
        generator.reseed()
    else:
        generator.configure(seed=args.seed)
        generator.regenerate()

    summary = generator.snapshot.summary()
    print("Py-HexMap Demo")
    print("=" * 40)
    print(f"Seed: {summary['seed']}  Size: {summary['size']}  Tiles: {summary['tiles']}")
    print(f"Surface height range: {summary['height_range'][0]:.3f} - {summary['height_range'][1]:.3f}")
    for terrain_type, count in summary["terrain_types"].items():
        print(f"  {TERRAIN_NAMES[terrain_type]:<12} {count}")
    for kind, total in summary["resources"].items():
        print(f"  {kind:<12} {total:.1f}")

    draw_map(generator, args.output)


if __name__ == "__main__":
    main()
