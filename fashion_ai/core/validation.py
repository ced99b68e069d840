"""
Input Validation Module (v1.0.0)
Validates uploaded clothing photos, look contexts and feedback before processing.
"""
import io
import base64
import logging
from typing import Tuple, Optional, List, Union

from PIL import Image, ImageOps

from fashion_ai.config import get_settings
from fashion_ai.core.models import RATINGS, LookContext

logger = logging.getLogger(__name__)

EXIF_ORIENTATION_TAG = 0x0112


class ValidationError(Exception):
    """Custom exception for validation errors."""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


# ==================== IMAGE UPLOADS ====================

def validate_file_size(content: bytes, max_mb: Optional[int] = None) -> None:
    """
    Check if file size is within limits.

    Raises:
        ValidationError: If file exceeds the configured maximum
    """
    if max_mb is None:
        max_mb = get_settings().max_upload_mb

    if not content:
        raise ValidationError("Por favor, selecione uma imagem", status_code=400)

    size_mb = len(content) / (1024 * 1024)
    if len(content) > max_mb * 1024 * 1024:
        raise ValidationError(
            f"Imagem muito grande: {size_mb:.1f}MB (máximo {max_mb}MB)",
            status_code=413
        )
    logger.debug(f"File size OK: {size_mb:.2f}MB")


def validate_mime_type(content_type: Optional[str]) -> str:
    """
    Check that the upload is an image.

    Returns:
        Normalized MIME type

    Raises:
        ValidationError: If MIME type is missing or not image/*
    """
    if content_type is None:
        raise ValidationError("Missing Content-Type header", status_code=415)

    # Normalize content type (remove charset etc.)
    mime = content_type.split(";")[0].strip().lower()

    if not mime.startswith("image/"):
        raise ValidationError(
            f"Por favor, selecione apenas arquivos de imagem (recebido: {mime})",
            status_code=415
        )
    logger.debug(f"MIME type OK: {mime}")
    return mime


def decode_image(content: bytes) -> Image.Image:
    """
    Decode image bytes to PIL Image.

    Raises:
        ValidationError: If image cannot be decoded
    """
    try:
        image = Image.open(io.BytesIO(content))
        image.load()  # Force load to catch truncated images
        return image
    except Exception as e:
        raise ValidationError(
            f"Cannot decode image: {str(e)}",
            status_code=400
        )


def fix_exif_orientation(image: Image.Image) -> Tuple[Image.Image, bool]:
    """
    Fix image orientation based on EXIF data.

    Returns:
        (properly oriented image, whether it changed)
    """
    try:
        orientation = image.getexif().get(EXIF_ORIENTATION_TAG)
        if orientation not in range(2, 9):
            return image, False

        fmt = image.format
        image = ImageOps.exif_transpose(image)
        image.format = fmt
        logger.debug(f"Fixed EXIF orientation: {orientation}")
        return image, True

    except Exception as e:
        logger.warning(f"Could not fix EXIF orientation: {e}")
        return image, False


def to_data_url(content: bytes, mime: str) -> str:
    """Encode raw image bytes as a data URL the model can read inline."""
    return f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}"


def image_to_data_url(image: Image.Image, content: bytes, mime: str, changed: bool) -> str:
    """Data URL for the upload, re-encoding only when orientation was fixed."""
    if not changed:
        return to_data_url(content, mime)

    buffer = io.BytesIO()
    if image.format == "PNG":
        image.save(buffer, format="PNG")
        mime = "image/png"
    else:
        image.convert("RGB").save(buffer, format="JPEG", quality=95)
        mime = "image/jpeg"
    return to_data_url(buffer.getvalue(), mime)


def validate_image_bytes(content: bytes, content_type: Optional[str]) -> Tuple[Image.Image, str]:
    """
    Complete validation pipeline for uploaded clothing photos.

    Returns:
        Tuple of (PIL Image, data URL)

    Raises:
        ValidationError: If any validation fails
    """
    validate_file_size(content)
    mime = validate_mime_type(content_type)
    image = decode_image(content)
    image, changed = fix_exif_orientation(image)

    logger.info(f"Image validated: {image.size[0]}x{image.size[1]}, {image.mode}")

    return image, image_to_data_url(image, content, mime, changed)


# ==================== FORM AND JSON INPUT ====================

def parse_csv(value: Optional[Union[str, List[str]]]) -> List[str]:
    """Split 'a, b,c' (or a list of such strings) into trimmed non-empty values."""
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    parts = []
    for entry in value:
        parts.extend(p.strip() for p in str(entry).split(","))
    return [p for p in parts if p]


def validate_look_context(
    occasion: Optional[str],
    season: Optional[str],
    weather: Optional[str] = None,
    preferred_styles: Optional[Union[str, List[str]]] = None,
    exclude_items: Optional[List[str]] = None
) -> LookContext:
    """
    Validate input for look generation.

    Raises:
        ValidationError: If occasion or season is missing
    """
    occasion = (occasion or "").strip()
    season = (season or "").strip()

    if not occasion or not season:
        raise ValidationError("Ocasião e estação são obrigatórios", status_code=400)

    return LookContext(
        occasion=occasion,
        season=season,
        weather=(weather or "").strip() or None,
        preferred_styles=parse_csv(preferred_styles) or None,
        exclude_items=[i for i in (exclude_items or []) if i] or None,
    )


def validate_feedback_input(look_id: Optional[str], rating: Optional[str]) -> Tuple[str, str]:
    """
    Validate input for POST /api/feedback.

    Returns:
        (look_id, normalized rating)

    Raises:
        ValidationError: If look id or rating is missing or the rating is unknown
    """
    look_id = (look_id or "").strip()
    rating = (rating or "").strip().lower()

    if not look_id or not rating:
        raise ValidationError("Look ID e avaliação são obrigatórios", status_code=400)

    if rating not in RATINGS:
        raise ValidationError(f"rating must be one of: {', '.join(RATINGS)}", status_code=400)

    return look_id, rating
