import argparse
import asyncio
import json
import logging
import sys

from favicon_gen.config import Config, DEFAULT_CONFIG_PATH
from favicon_gen.errors import FaviconError
from favicon_gen.logger import setup_logging
from favicon_gen.plugin import FaviconPlugin

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="favicon-gen",
        description="Generate favicon.ico, touch icons and a web manifest from one square image.",
    )
    parser.add_argument("source", help="Square source image (PNG, JPEG, SVG...)")
    parser.add_argument("-o", "--output-dir", help="Directory to write the assets to")
    parser.add_argument("--bg-color", help="Apple touch icon background color")
    parser.add_argument("--padding", type=int, help="Apple touch icon padding in pixels")
    parser.add_argument("--manifest-data",
                        help="Extra manifest fields as JSON, or @path to a JSON file")
    parser.add_argument("--no-manifest", action="store_true", help="Do not write manifest.webmanifest")
    parser.add_argument("--skip-cache", action="store_true", help="Always regenerate")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="JSON config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug output on the console")
    return parser


def load_manifest_data(value):
    """Parse --manifest-data: inline JSON, or ``@file`` to read JSON from a file."""
    if not value:
        return None
    if value.startswith("@"):
        with open(value[1:], "r", encoding="utf-8") as file:
            return json.load(file)
    return json.loads(value)


def build_plugin(args, config):
    """Create the plugin from config defaults overridden by command-line flags."""
    manifest_data = load_manifest_data(args.manifest_data)
    if manifest_data is None:
        manifest_data = config.get_json("FAVICON_MANIFEST_DATA", {})

    return FaviconPlugin(
        output_dir=args.output_dir or config.get("FAVICON_OUTPUT_DIR", "./_site"),
        manifest_data=manifest_data,
        generate_manifest=not args.no_manifest and config.get_bool("FAVICON_GENERATE_MANIFEST", True),
        skip_cache=args.skip_cache or config.get_bool("FAVICON_SKIP_CACHE", False),
    )


def shortcode_overrides(args, config):
    overrides = {}
    bg_color = args.bg_color or config.get("FAVICON_APPLE_BG_COLOR")
    if bg_color:
        overrides["apple_icon_bg_color"] = bg_color
    padding = args.padding if args.padding is not None else config.get_int("FAVICON_APPLE_PADDING")
    if padding is not None:
        overrides["apple_icon_padding"] = padding
    return overrides


def run(args, config=None, plugin=None):
    """
    Generate the favicons described by parsed command-line ``args``.

    Returns:
        str: The HTML fragment linking the generated assets
    """
    if config is None:
        config = Config(args.config)
    if plugin is None:
        plugin = build_plugin(args, config)

    logger.info(f"Output directory: {plugin.output_dir}")
    return asyncio.run(plugin.shortcode(args.source, **shortcode_overrides(args, config)))


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = Config(args.config)
    setup_logging(config.get("LOG_DIR", "logs"), verbose=args.verbose)

    try:
        html = run(args, config)
    except (FaviconError, OSError, ValueError) as e:
        logger.error(f"Favicon generation failed: {e}")
        return 1

    sys.stdout.write(html)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
