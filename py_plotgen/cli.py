"""
Command line entry point.

    python -m py_plotgen list
    python -m py_plotgen render maze --seed 42 --set density=20 --output out/
"""

import argparse
import math
import sys
from typing import Dict, List, Optional

import structlog
from pydantic import ValidationError

from .config import settings
from .generators import OrbitGenerator, get_generator, list_generators
from .utils.logging import configure_logging

logger = structlog.get_logger()


def parse_overrides(items: List[str]) -> Dict[str, str]:
    """
    Turn ``key=value`` strings into a dict.

    Values stay strings; the parameter model converts them.

    Raises:
        ValueError: If an item has no ``=`` or an empty key
    """
    overrides = {}
    for item in items:
        key, sep, value = item.partition("=")
        key = key.strip().replace("-", "_")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got '{item}'")
        overrides[key] = value.strip()
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-plotgen",
        description="Generate plotter-ready SVG line art",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List available generators")

    render = subparsers.add_parser("render", help="Generate a pattern and export it as SVG")
    render.add_argument("generator", help="Generator name (see 'list')")
    render.add_argument("--seed", type=int, help="Seed (random when omitted)")
    render.add_argument(
        "--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
        help="Override a generator parameter; may be repeated",
    )
    render.add_argument("--orbit-x", type=float, default=0.0,
                        help="Camera orbit pitch in degrees (3D generators)")
    render.add_argument("--orbit-y", type=float, default=0.0,
                        help="Camera orbit yaw in degrees (3D generators)")
    render.add_argument("--output", default=settings.output_dir,
                        help="Output file or directory")
    return parser


def run_render(args, parser: argparse.ArgumentParser) -> int:
    try:
        overrides = parse_overrides(args.overrides)
    except ValueError as e:
        parser.error(str(e))

    try:
        generator = get_generator(args.generator, params=overrides or None)
    except ValidationError as e:
        logger.error("Invalid parameters", generator=args.generator,
                     errors=e.errors(include_url=False))
        return 1
    except ValueError as e:
        logger.error("Generator lookup failed", error=str(e))
        return 1

    if args.orbit_x or args.orbit_y:
        if isinstance(generator, OrbitGenerator):
            generator.camera.orbit(math.radians(args.orbit_y), math.radians(args.orbit_x))
        else:
            logger.warning("Orbit ignored, generator has no orbit camera",
                           generator=generator.name)

    generator.generate(seed=args.seed)
    path = generator.resolve_export_path(args.output)
    document = generator.export_svg(path)
    if document is None:
        return 1

    print(path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, settings.log_format)

    if args.command == "list":
        for name in list_generators():
            print(name)
        return 0
    return run_render(args, parser)


if __name__ == "__main__":
    sys.exit(main())
