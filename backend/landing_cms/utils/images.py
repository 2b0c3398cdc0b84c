import io
from dataclasses import dataclass
from typing import Callable, Optional
from flask import current_app
from PIL import Image, ImageOps

THUMBNAIL_SIZE = (300, 300)
THUMBNAIL_QUALITY = 80
WEBP_QUALITY = 80


@dataclass
class ImageVariants:
    width: Optional[int] = None
    height: Optional[int] = None
    thumbnail_path: Optional[str] = None
    webp_path: Optional[str] = None


def is_raster_image(mime_type: str) -> bool:
    return mime_type.startswith("image/") and mime_type != "image/svg+xml"


def _to_rgb(img: Image.Image) -> Image.Image:
    # JPEG has no alpha channel; flatten onto white
    if img.mode in ("RGBA", "LA", "P"):
        img = img.convert("RGBA")
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def render_thumbnail(data: bytes) -> bytes:
    with Image.open(io.BytesIO(data)) as img:
        img = ImageOps.exif_transpose(img)
        thumb = _to_rgb(img)
        # thumbnail() keeps aspect ratio and never upscales
        thumb.thumbnail(THUMBNAIL_SIZE, Image.Resampling.LANCZOS)
        out = io.BytesIO()
        thumb.save(out, "JPEG", quality=THUMBNAIL_QUALITY, optimize=True)
        return out.getvalue()


def render_webp(data: bytes) -> bytes:
    with Image.open(io.BytesIO(data)) as img:
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA" if "A" in img.getbands() or img.mode == "P" else "RGB")
        out = io.BytesIO()
        img.save(out, "WEBP", quality=WEBP_QUALITY)
        return out.getvalue()


def derive_variants(
    data: bytes,
    *,
    mime_type: str,
    save: Callable[[str, bytes], str],
    thumbnail_name: str,
    webp_name: str,
) -> ImageVariants:
    """
    Produce thumbnail and WebP variants for a raster upload.

    Every step is independent: a failure is logged and leaves that
    variant as None, the upload itself carries on.
    """
    variants = ImageVariants()

    try:
        with Image.open(io.BytesIO(data)) as img:
            variants.width, variants.height = img.size
    except Exception:
        current_app.logger.exception("Could not read image dimensions (%s)", mime_type)
        return variants

    try:
        variants.thumbnail_path = save(thumbnail_name, render_thumbnail(data))
    except Exception:
        current_app.logger.exception("Thumbnail generation failed for %s", thumbnail_name)

    if mime_type != "image/webp":
        try:
            variants.webp_path = save(webp_name, render_webp(data))
        except Exception:
            current_app.logger.exception("WebP generation failed for %s", webp_name)

    return variants
