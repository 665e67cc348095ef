"""
Favicon asset generation.

Builds the "six files that fit most needs" set from one square source:
favicon.ico (64/32/16), a padded 180px apple-touch-icon, 192px and 512px
PNGs for Android/PWA, an optional web manifest and, for SVG sources, a copy
of the SVG itself. Repeated calls for an unchanged source with the same
options are answered from the generation cache without touching disk.
"""

import asyncio
import logging
import os
import shutil
import stat as stat_module
from pathlib import Path

from favicon_gen import ico, image_ops, manifest
from favicon_gen.cache import CacheKey, GenerationCache
from favicon_gen.errors import InvalidDimensionsError, InvalidPaddingError, SourceNotFoundError
from favicon_gen.options import resolve_options

logger = logging.getLogger(__name__)

DEST_SVG = "/favicon.svg"
DEST_ICO = "/favicon.ico"
DEST_APPLE = "/apple-touch-icon.png"
DEST_GOOGLE_HOME = "/icon-192.png"
DEST_GOOGLE_LOADING = "/icon-512.png"
DEST_MANIFEST = "/manifest.webmanifest"

APPLE_SIZE = 180
GOOGLE_HOME_SIZE = 192
GOOGLE_LOAD_SIZE = 512

default_cache = GenerationCache()


def asset_paths(is_vector, generate_manifest):
    """The logical name -> output path map for a source kind and manifest choice."""
    files = {}
    if generate_manifest:
        files["manifest"] = DEST_MANIFEST
    if is_vector:
        files["svg"] = DEST_SVG
    files.update({
        "ico": DEST_ICO,
        "apple": DEST_APPLE,
        "googleHome": DEST_GOOGLE_HOME,
        "googleLoading": DEST_GOOGLE_LOADING,
    })
    return files


def _dest(output_dir, dest):
    return Path(output_dir) / dest.lstrip("/")


def _stat_source(source):
    try:
        st = os.stat(source)
    except OSError as e:
        raise SourceNotFoundError(f"source favicon not found: {source}") from e
    if not stat_module.S_ISREG(st.st_mode):
        raise SourceNotFoundError(f"source favicon is not a file: {source}")
    return st


def validate(source, options):
    """
    Check that a source can be turned into favicons with the given options.

    Args:
        source: Path to the source image
        options: GenerationOptions to validate the padding of

    Returns:
        tuple: (os.stat_result, SourceMetadata) for the source

    Raises:
        SourceNotFoundError: The source is missing or not a readable file
        InvalidDimensionsError: The source is not square
        InvalidPaddingError: The apple icon padding leaves no room for the icon
    """
    stat = _stat_source(source)
    metadata = image_ops.read_metadata(source)
    if metadata.width != metadata.height:
        raise InvalidDimensionsError(metadata.width, metadata.height)

    padding = options.apple_icon_padding
    if (
        isinstance(padding, bool)
        or not isinstance(padding, int)
        or padding < 0
        or 2 * padding >= APPLE_SIZE
    ):
        raise InvalidPaddingError(padding, APPLE_SIZE)
    return stat, metadata


async def _write(path, data):
    # let sibling jobs run between encoding and writing
    await asyncio.sleep(0)
    path.write_bytes(data)


async def _ico_job(source, metadata, output_dir):
    frames = []
    for dim in ico.ICO_SIZES:
        frames.append(image_ops.resize_square(source, metadata, dim))
        await asyncio.sleep(0)
    await _write(_dest(output_dir, DEST_ICO), ico.pack_ico(frames))


async def _apple_job(source, metadata, output_dir, padding, bg_color):
    inner = APPLE_SIZE - 2 * padding
    data = image_ops.pad_square(source, metadata, inner, padding, bg_color)
    await _write(_dest(output_dir, DEST_APPLE), data)


async def _png_job(source, metadata, output_dir, dim, dest):
    data = image_ops.resize_square(source, metadata, dim)
    await _write(_dest(output_dir, dest), data)


async def generate(source, output_dir, options=None, cache=None):
    """
    Generate the favicon set for ``source`` into ``output_dir``.

    Args:
        source: Path to a square raster image or SVG
        output_dir: Directory to write into, created if missing
        options: GenerationOptions, or a mapping of overrides on the defaults
        cache: GenerationCache to consult; the module default if omitted

    Returns:
        dict: Logical asset name -> path relative to ``output_dir``
    """
    options = resolve_options(options)
    if cache is None:
        cache = default_cache

    stat, metadata = validate(source, options)
    files = asset_paths(metadata.is_vector, options.generate_manifest)

    key = CacheKey(os.path.abspath(source), os.path.abspath(output_dir))
    if not options.skip_cache and cache.is_fresh(key, stat.st_mtime_ns, options):
        logger.debug(f"Favicons for {source} in {output_dir} are up to date")
        return files

    logger.info(f"Generating favicons for {source} into {output_dir}")
    os.makedirs(output_dir, exist_ok=True)

    if metadata.is_vector:
        shutil.copyfile(source, _dest(output_dir, DEST_SVG))

    padding = options.apple_icon_padding
    jobs = [
        _ico_job(source, metadata, output_dir),
        _apple_job(source, metadata, output_dir, padding, options.apple_icon_bg_color),
        _png_job(source, metadata, output_dir, GOOGLE_HOME_SIZE, DEST_GOOGLE_HOME),
        _png_job(source, metadata, output_dir, GOOGLE_LOAD_SIZE, DEST_GOOGLE_LOADING),
    ]
    tasks = [asyncio.ensure_future(job) for job in jobs]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        # stop sibling jobs from writing after the failure is reported
        for task in tasks:
            task.cancel()
        raise

    if options.generate_manifest:
        document = manifest.compose(
            options.manifest_data,
            DEST_GOOGLE_HOME,
            DEST_GOOGLE_LOADING,
            home_size=GOOGLE_HOME_SIZE,
            load_size=GOOGLE_LOAD_SIZE,
        )
        _dest(output_dir, DEST_MANIFEST).write_text(manifest.dumps(document), encoding="utf-8")

    cache.store(key, stat.st_mtime_ns, options)
    logger.info(f"Wrote {len(files)} favicon assets to {output_dir}")
    return files
