"""Pack PNG frames into a multi-resolution .ico container."""

from io import BytesIO

from PIL import Image

from favicon_gen.errors import TransformError

# largest first
ICO_SIZES = (64, 32, 16)


def pack_ico(raster_buffers):
    """
    Build a single ICO file from PNG buffers.

    Every frame is converted to RGBA so all embedded images share the same
    channel layout. The largest frame is used as the base image, since
    Pillow drops requested sizes bigger than the base.

    :param raster_buffers: PNG-encoded images, one per embedded size
    :return: The ICO file contents
    """
    if not raster_buffers:
        raise TransformError("an icon needs at least one frame")

    try:
        frames = []
        for buf in raster_buffers:
            with Image.open(BytesIO(buf)) as img:
                frames.append(img.convert("RGBA"))
        frames.sort(key=lambda f: f.width, reverse=True)

        out = BytesIO()
        frames[0].save(
            out,
            format="ICO",
            sizes=[f.size for f in frames],
            append_images=frames[1:],
        )
    except (OSError, ValueError) as e:
        raise TransformError(f"could not pack icon: {e}") from e
    return out.getvalue()
