"""Main module for the image renditions CLI."""

import sys
import argparse
from typing import List, Optional

from . import __version__
from .core import (
    ConfigurationError,
    RenditionConfig,
    decode_event_key,
    get_logger,
    load_config,
    plan_geometry,
)
from .core.factories import PipelineFactory


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for every subcommand."""
    parser = argparse.ArgumentParser(
        prog="image-renditions",
        description="Image Renditions - resize/crop an S3 image into configured sizes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create every configured rendition of one uploaded image
  image-renditions process --bucket my-bucket --key original/abc123/photo.jpg

  # Run jobs one by one, stopping at the first failure
  image-renditions process --bucket my-bucket --key original/abc123/photo.jpg \\
                           --strategy serial

  # Show the crop/resize plan for a 1920x1080 source
  image-renditions plan --width 1920 --height 1080
        """,
    )
    parser.add_argument("--config", default=None, help="JSON configuration file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    process_parser = subparsers.add_parser(
        "process", help="Create renditions of one source object"
    )
    process_parser.add_argument("--bucket", required=True, help="Source S3 bucket")
    process_parser.add_argument("--key", required=True, help="Source S3 key")
    process_parser.add_argument(
        "--encoded",
        action="store_true",
        help="Key is URL-encoded as in S3 notifications",
    )
    process_parser.add_argument(
        "--strategy",
        choices=["threaded", "serial"],
        default=None,
        help="Job scheduling strategy (default: threaded)",
    )
    process_parser.add_argument("--acl", default=None, help="ACL for stored renditions")
    process_parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers.add_parser("sizes", help="List configured sizes")

    plan_parser = subparsers.add_parser(
        "plan", help="Print the geometry plan of every size for a source size"
    )
    plan_parser.add_argument("--width", type=int, required=True, help="Source width")
    plan_parser.add_argument("--height", type=int, required=True, help="Source height")

    subparsers.add_parser("version", help="Show version information")

    return parser


def _print_sizes(config: RenditionConfig) -> None:
    for size in config.sizes:
        crop = "crop" if size.crop else "fit"
        print(f"{size.name:<16} {size.max_width}x{size.max_height} {crop}")


def _print_plans(config: RenditionConfig, width: int, height: int) -> None:
    for size in config.sizes:
        plan = plan_geometry(width, height, size)
        print(
            f"{size.name:<16} crop {plan.crop_width}x{plan.crop_height}"
            f"+{plan.crop_x}+{plan.crop_y} -> {plan.output_width}x{plan.output_height}"
        )


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the command-line interface.

    Exits with status 1 when configuration is invalid or any rendition fails.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = get_logger("image-renditions.cli")

    if args.command == "version":
        print("Image Renditions CLI")
        print(f"Version {__version__}")
        sys.exit(0)

    if args.command not in ("process", "sizes", "plan"):
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "process":
            config = load_config(
                args.config,
                strategy=args.strategy,
                acl=args.acl,
                debug=args.debug or None,
            )
        else:
            config = load_config(args.config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    if args.command == "sizes":
        _print_sizes(config)
        return

    if args.command == "plan":
        if args.width <= 0 or args.height <= 0:
            parser.error("--width and --height must be positive")
        _print_plans(config, args.width, args.height)
        return

    key = decode_event_key(args.key) if args.encoded else args.key

    try:
        pipeline = PipelineFactory.create_pipeline(config=config)
        result = pipeline.run(args.bucket, key)
    except KeyboardInterrupt:
        logger.warning("Processing interrupted by user.")
        sys.exit(130)

    for outcome in result.outcomes:
        detail = outcome.error or outcome.message
        print(f"{outcome.size_name:<16} {outcome.status.value:<10} {detail}")

    if not result.success:
        logger.error(f"Processing failed: {result.error}")
        sys.exit(1)


if __name__ == "__main__":
    main()
