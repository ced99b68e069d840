"""
Tests for upload, look context and feedback validation.
"""
import base64
import io

import pytest
from PIL import Image

from fashion_ai.core.validation import (
    EXIF_ORIENTATION_TAG,
    ValidationError,
    fix_exif_orientation,
    parse_csv,
    validate_feedback_input,
    validate_file_size,
    validate_image_bytes,
    validate_look_context,
    validate_mime_type,
)


def _png_bytes(size=(40, 20)):
    buffer = io.BytesIO()
    Image.new("RGB", size, color="red").save(buffer, format="PNG")
    return buffer.getvalue()


def _jpeg_with_orientation(orientation, size=(40, 20)):
    image = Image.new("RGB", size)
    exif = image.getexif()
    exif[EXIF_ORIENTATION_TAG] = orientation
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", exif=exif.tobytes())
    return buffer.getvalue()


# ==================== IMAGE UPLOADS ====================

class TestFileSize:

    def test_empty_upload(self):
        with pytest.raises(ValidationError) as exc:
            validate_file_size(b"")
        assert exc.value.status_code == 400
        assert exc.value.message == "Por favor, selecione uma imagem"

    def test_within_limit(self):
        validate_file_size(b"x" * 1024, max_mb=1)

    def test_too_large(self):
        with pytest.raises(ValidationError) as exc:
            validate_file_size(b"x" * (1024 * 1024 + 1), max_mb=1)
        assert exc.value.status_code == 413

    def test_default_limit_is_ten_megabytes(self):
        validate_file_size(b"x" * (10 * 1024 * 1024))
        with pytest.raises(ValidationError):
            validate_file_size(b"x" * (10 * 1024 * 1024 + 1))


class TestMimeType:

    @pytest.mark.parametrize("content_type", ["image/jpeg", "image/png", "image/webp", "IMAGE/HEIC"])
    def test_accepts_any_image(self, content_type):
        assert validate_mime_type(content_type).startswith("image/")

    def test_strips_parameters(self):
        assert validate_mime_type("image/png; charset=binary") == "image/png"

    @pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", None])
    def test_rejects_non_images(self, content_type):
        with pytest.raises(ValidationError) as exc:
            validate_mime_type(content_type)
        assert exc.value.status_code == 415


class TestImagePipeline:

    def test_returns_data_url_of_uploaded_bytes(self, jpeg_bytes):
        image, data_url = validate_image_bytes(jpeg_bytes, "image/jpeg")

        assert image.size == (100, 120)
        header, payload = data_url.split(",", 1)
        assert header == "data:image/jpeg;base64"
        assert base64.b64decode(payload) == jpeg_bytes

    def test_undecodable_image(self):
        with pytest.raises(ValidationError) as exc:
            validate_image_bytes(b"not really a picture", "image/jpeg")
        assert exc.value.status_code == 400
        assert "Cannot decode image" in exc.value.message

    def test_wrong_type_checked_before_decoding(self):
        with pytest.raises(ValidationError) as exc:
            validate_image_bytes(b"%PDF-1.4", "application/pdf")
        assert exc.value.status_code == 415

    def test_png_kept_as_png(self):
        _, data_url = validate_image_bytes(_png_bytes(), "image/png")
        assert data_url.startswith("data:image/png;base64,")

    def test_exif_rotation(self):
        image = Image.new("RGB", (40, 20))
        exif = image.getexif()
        exif[EXIF_ORIENTATION_TAG] = 6
        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", exif=exif.tobytes())
        decoded = Image.open(io.BytesIO(buffer.getvalue()))

        fixed, changed = fix_exif_orientation(decoded)

        assert changed is True
        assert fixed.size == (20, 40)

    @pytest.mark.parametrize("orientation,size", [(2, (40, 20)), (3, (40, 20)), (8, (20, 40))])
    def test_other_orientations(self, orientation, size):
        decoded = Image.open(io.BytesIO(_jpeg_with_orientation(orientation)))

        fixed, changed = fix_exif_orientation(decoded)

        assert changed is True
        assert fixed.size == size
        assert fixed.format == "JPEG"

    def test_rotated_upload_is_reencoded(self):
        content = _jpeg_with_orientation(6)

        image, data_url = validate_image_bytes(content, "image/jpeg")

        assert image.size == (20, 40)
        payload = base64.b64decode(data_url.split(",", 1)[1])
        assert payload != content
        assert Image.open(io.BytesIO(payload)).size == (20, 40)

    def test_no_exif_is_untouched(self):
        image = Image.new("RGB", (40, 20))

        fixed, changed = fix_exif_orientation(image)

        assert changed is False
        assert fixed is image


# ==================== FORM AND JSON INPUT ====================

class TestParseCsv:

    def test_splits_and_trims(self):
        assert parse_csv("Casual, Clássico ,,Boho-Chic") == ["Casual", "Clássico", "Boho-Chic"]

    def test_accepts_lists(self):
        assert parse_csv(["Casual", "Vintage, Retrô"]) == ["Casual", "Vintage", "Retrô"]

    @pytest.mark.parametrize("value", [None, "", [], " , "])
    def test_empty(self, value):
        assert parse_csv(value) == []


class TestLookContext:

    def test_valid_context(self):
        context = validate_look_context(
            occasion=" Trabalho ",
            season="Inverno",
            weather="",
            preferred_styles="Clássico, Minimalista",
            exclude_items=["item_1", ""],
        )

        assert context.occasion == "Trabalho"
        assert context.weather is None
        assert context.preferred_styles == ["Clássico", "Minimalista"]
        assert context.exclude_items == ["item_1"]

    @pytest.mark.parametrize("occasion,season", [("", "Verão"), ("Festa", None), ("  ", "  ")])
    def test_occasion_and_season_required(self, occasion, season):
        with pytest.raises(ValidationError) as exc:
            validate_look_context(occasion=occasion, season=season)
        assert exc.value.status_code == 400
        assert exc.value.message == "Ocasião e estação são obrigatórios"


class TestFeedbackInput:

    def test_normalizes_rating(self):
        assert validate_feedback_input("look_1", " Approve ") == ("look_1", "approve")

    def test_missing_fields(self):
        with pytest.raises(ValidationError) as exc:
            validate_feedback_input("", "approve")
        assert exc.value.message == "Look ID e avaliação são obrigatórios"

    def test_unknown_rating(self):
        with pytest.raises(ValidationError) as exc:
            validate_feedback_input("look_1", "love")
        assert exc.value.status_code == 400
        assert "approve, reject" in exc.value.message
