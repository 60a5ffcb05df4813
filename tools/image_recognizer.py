# tools/image_recognizer.py
"""
CalorieBuddy AI — Image Recognition Tool
========================================
Describes the food in a photo using Gemini Vision. The answer is plain text
("grilled chicken breast (150g), steamed rice (100g)") that goes back through
the meal parser.

No offline fallback: a failed recognition is reported to the caller, who asks
the user to retake or re-upload the photo.
"""

import io
from typing import Any, Optional

import PIL.Image

from tools.gemini_client import GEMINI_CONFIG, AIServiceError, generate_text

# =============================================================================
# CONFIGURATION
# =============================================================================
IMAGE_CONFIG = {
    "max_bytes": 5 * 1024 * 1024,
    "allowed_mime_types": ("image/jpeg", "image/png", "image/webp", "image/gif"),
}

RECOGNITION_PROMPT = """
You are a food calorie estimation expert. Analyze this image of food carefully.

Identify all food items present in the image and provide:
- The name of each food item
- Estimated portion size or quantity
- If multiple items are present, list them separately

Return a natural description like: "grilled chicken breast (150g), steamed rice (100g), mixed vegetables (80g)" or "large cheese pizza slice (120g), coca cola (330ml)"

Be specific about quantities and types of food. If you see condiments or sauces, include them too.
Return only the description, no JSON and no extra commentary.
"""


class ImageRecognitionError(AIServiceError):
    """The photo could not be validated or described."""


# =============================================================================
# HELPERS
# =============================================================================
def detect_image_mime_type(image_bytes: bytes) -> str:
    """
    Check the bytes really are an image and return its MIME type.

    Raises:
        ImageRecognitionError: empty, too large, unreadable or unsupported.
    """
    if not image_bytes:
        raise ImageRecognitionError("No image data provided")
    if len(image_bytes) > IMAGE_CONFIG["max_bytes"]:
        raise ImageRecognitionError("Image is larger than 5 MB")

    try:
        with PIL.Image.open(io.BytesIO(image_bytes)) as img:
            img.verify()
            image_format = img.format
    except Exception as e:
        raise ImageRecognitionError(f"Image load failed: {e}") from e

    mime_type = PIL.Image.MIME.get(image_format or "")
    if mime_type not in IMAGE_CONFIG["allowed_mime_types"]:
        raise ImageRecognitionError(f"Unsupported image format: {image_format}")
    return mime_type


# =============================================================================
# MAIN TOOL: recognize_food_image
# =============================================================================
def recognize_food_image(
    image_bytes: bytes,
    mime_type: Optional[str] = None,
    client: Any = None,
) -> str:
    """
    Ask the vision model what food is in the photo.

    Args:
        image_bytes: Raw JPEG/PNG/WebP/GIF bytes (max 5 MB).
        mime_type: Declared type; the detected type wins when they differ.
        client: optional genai client (tests pass a fake)

    Returns:
        Free-text description of the food items and portions.

    Raises:
        ImageRecognitionError: invalid image, request failure or empty answer.
    """
    detected = detect_image_mime_type(image_bytes)
    if mime_type and mime_type != detected:
        print(f"⚠️ Image Recognizer: declared {mime_type}, detected {detected}")

    try:
        text = generate_text(
            RECOGNITION_PROMPT,
            client=client,
            model=GEMINI_CONFIG["vision_model"],
            image_bytes=image_bytes,
            mime_type=detected,
        )
    except AIServiceError as e:
        print(f"❌ Image Recognizer: {e}")
        raise ImageRecognitionError(f"Could not recognize food in image: {e}") from e

    description = text.strip()
    print(f"✅ Image Recognizer: {description[:80]}")
    return description


__all__ = [
    "IMAGE_CONFIG",
    "RECOGNITION_PROMPT",
    "ImageRecognitionError",
    "detect_image_mime_type",
    "recognize_food_image",
]
