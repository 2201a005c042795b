"""Command-line entry point.

Usage: timelapsefusion src_path dest_path alphaC alphaS alphaE tau
"""

import argparse
import logging
import sys
from typing import Optional

from .common.exceptions import (
    TimeLapseFusionConfigurationException,
    TimeLapseFusionException,
    TimeLapseFusionValidationException,
)
from .fuse import fuse_sequence

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

EPILOG = """\
Example: timelapsefusion ./src/ ./output/ 1.0 1.0 .15 15
  if tau=-1, no temporal blending is done, which
  results in standard exposure fusion on the input frames
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timelapsefusion",
        description="Time-Lapse Fusion of an image sequence",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("src_path", help="Path to source (.ppm) images")
    parser.add_argument("dst_path", help="Output image path")
    parser.add_argument(
        "alpha_c", type=float, help="Alpha for contribution of the contrast map"
    )
    parser.add_argument(
        "alpha_s", type=float, help="Alpha for contribution of the saturation map"
    )
    parser.add_argument(
        "alpha_e",
        type=float,
        help="Alpha for contribution of the well-exposedness map",
    )
    parser.add_argument(
        "tau", type=float, help="Number of frames to blend into each output image"
    )
    parser.add_argument(
        "--levels", type=int, default=5, help="Number of pyramid levels (default: 5)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    # argparse exits with EXIT_USAGE on a wrong number of parameters
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        fuse_sequence(
            args.src_path,
            args.dst_path,
            alpha_c=args.alpha_c,
            alpha_s=args.alpha_s,
            alpha_e=args.alpha_e,
            tau=args.tau,
            levels=args.levels,
        )
    except (
        TimeLapseFusionValidationException,
        TimeLapseFusionConfigurationException,
    ) as e:
        parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except TimeLapseFusionException as e:
        logger.error(f"Time-Lapse Fusion failed: {e}")
        return EXIT_FAILURE

    return EXIT_OK
