"""Thumbnail generation for uploaded images."""
from io import BytesIO

from PIL import Image as PILImage

THUMBNAIL_MAX_WIDTH = 300
THUMBNAIL_MAX_HEIGHT = 200
THUMBNAIL_QUALITY = 70

# Pillow decoder names for each accepted upload type
PIL_FORMATS = {
    "image/jpeg": "JPEG",
}


def compute_thumbnail_size(
    width: int,
    height: int,
    max_width: int = THUMBNAIL_MAX_WIDTH,
    max_height: int = THUMBNAIL_MAX_HEIGHT,
) -> tuple[int, int]:
    """
    Scale (width, height) to the largest size that fits the bounding box.

    The constraining side is fixed at its maximum and the other side is
    derived from the same ratio, truncated to whole pixels. Small images are
    scaled up: a 100x50 source becomes 300x150.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image dimensions: {width}x{height}")

    width_ratio = max_width / width
    height_ratio = max_height / height

    if width_ratio < height_ratio:
        new_width = max_width
        new_height = int(height * width_ratio)
    else:
        new_width = int(width * height_ratio)
        new_height = max_height

    return max(new_width, 1), max(new_height, 1)


def generate_thumbnail(
    content: bytes,
    content_type: str,
    max_width: int = THUMBNAIL_MAX_WIDTH,
    max_height: int = THUMBNAIL_MAX_HEIGHT,
    quality: int = THUMBNAIL_QUALITY,
) -> bytes:
    """
    Decode *content*, fit it into max_width x max_height and re-encode as JPEG.

    Only the decoder matching *content_type* is tried, so a PNG posted as
    image/jpeg is rejected rather than silently decoded.

    Raises:
        ValueError: Unsupported content type or unusable dimensions
        OSError: Payload cannot be decoded or encoded (incl. UnidentifiedImageError)
        PIL.Image.DecompressionBombError: Pixel count above Pillow's safety limit
    """
    pil_format = PIL_FORMATS.get(content_type)
    if pil_format is None:
        raise ValueError(f"No decoder for content type: {content_type}")

    with PILImage.open(BytesIO(content), formats=[pil_format]) as img:
        size = compute_thumbnail_size(img.width, img.height, max_width, max_height)
        # Let the JPEG decoder downscale by a power of two while decoding
        img.draft("RGB", size)
        img.load()

        # JPEG has no alpha; CMYK and greyscale sources are normalised too
        if img.mode != "RGB":
            img = img.convert("RGB")

        thumb = img.resize(size, PILImage.Resampling.BICUBIC)

    buffer = BytesIO()
    thumb.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()
