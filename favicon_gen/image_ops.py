"""
Image transforms used to build favicon assets.

Raster sources are handled by Pillow. SVG sources are rasterized with
CairoSVG at the requested output size, so an upscaled vector icon stays
sharp. Every function returns PNG-encoded bytes.
"""

import codecs
import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, ImageColor, UnidentifiedImageError

from favicon_gen.errors import SourceNotFoundError, TransformError

logger = logging.getLogger(__name__)

SVG_FORMAT = "svg"
# CairoSVG renders at 96 DPI unless told otherwise
SVG_DEFAULT_DENSITY = 96


@dataclass(frozen=True)
class SourceMetadata:
    path: str
    format: str
    width: int
    height: int
    density: Optional[float] = None

    @property
    def is_vector(self):
        return self.format == SVG_FORMAT


def _looks_like_xml(head):
    # prologs and comments can push <svg> arbitrarily far, so CairoSVG has the final say
    if head.startswith(codecs.BOM_UTF8):
        head = head[len(codecs.BOM_UTF8):]
    return head.lstrip().startswith(b"<")


def read_metadata(source):
    """
    Probe a source image for its format, dimensions and density hint.

    Args:
        source: Path to a raster image or an SVG file

    Returns:
        SourceMetadata: What was read from the file

    Raises:
        SourceNotFoundError: If the file is missing, a directory or not readable
        TransformError: If the file is neither a readable raster image nor SVG
    """
    source = str(source)
    try:
        with Image.open(source) as img:
            dpi = img.info.get("dpi")
            return SourceMetadata(
                path=source,
                format=(img.format or "").lower(),
                width=img.width,
                height=img.height,
                density=float(dpi[0]) if dpi else None,
            )
    except UnidentifiedImageError:
        pass
    except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
        raise SourceNotFoundError(f"source favicon is not readable: {source}") from e
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise TransformError(f"could not read {source}: {e}") from e

    try:
        with open(source, "rb") as file:
            head = file.read(1024)
    except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
        raise SourceNotFoundError(f"source favicon is not readable: {source}") from e
    if not _looks_like_xml(head):
        raise TransformError(f"{source} is not a supported image")

    png = _render_svg(source)
    with Image.open(BytesIO(png)) as img:
        width, height = img.size
    logger.debug(f"SVG source {source} renders at {width}x{height}")
    return SourceMetadata(
        path=source,
        format=SVG_FORMAT,
        width=width,
        height=height,
        density=SVG_DEFAULT_DENSITY,
    )


def _render_svg(source, **kwargs):
    try:
        # needs the native cairo library, so only loaded for SVG sources
        import cairosvg

        return cairosvg.svg2png(url=str(source), **kwargs)
    except Exception as e:
        raise TransformError(f"could not rasterize {source}: {e}") from e


def _to_png(img):
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def _resized_image(source, metadata, target_dim):
    if metadata.is_vector:
        # scale the density with the output so the vector is rendered, not stretched
        density = metadata.density or SVG_DEFAULT_DENSITY
        png = _render_svg(
            source,
            dpi=target_dim / metadata.width * density,
            output_width=target_dim,
            output_height=target_dim,
        )
        img = Image.open(BytesIO(png))
        img.load()
        return img.convert("RGBA")

    try:
        with Image.open(source) as img:
            return img.convert("RGBA").resize(
                (target_dim, target_dim), Image.Resampling.LANCZOS
            )
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise TransformError(f"could not resize {source}: {e}") from e


def resize_square(source, metadata, target_dim):
    """Resize a square source to ``target_dim`` x ``target_dim`` and encode it as PNG."""
    img = _resized_image(Path(source), metadata, target_dim)
    return _to_png(img)


def pad_square(source, metadata, inner_dim, padding, background_color):
    """
    Resize a square source to ``inner_dim`` and centre it on a solid canvas.

    The canvas is ``inner_dim + 2 * padding`` pixels square and filled with
    ``background_color``, which may be any color Pillow understands
    (``"white"``, ``"#f00"``, ``"rgb(0, 0, 0)"``...).
    """
    img = _resized_image(Path(source), metadata, inner_dim)
    try:
        fill = ImageColor.getcolor(background_color, "RGBA")
    except ValueError as e:
        raise TransformError(f"invalid background color {background_color!r}") from e

    size = inner_dim + 2 * padding
    canvas = Image.new("RGBA", (size, size), fill)
    canvas.alpha_composite(img, (padding, padding))
    return _to_png(canvas)
