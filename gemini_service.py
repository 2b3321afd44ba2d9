"""The three calls the studio makes to Gemini.

Each call is one request/response exchange. Anything that goes wrong on the
remote side (network, auth, an odd response shape) is logged here and
re-raised as a GenerationError carrying a message fit for the UI.
"""
import base64
import logging
from collections import namedtuple

from google import genai
from google.genai import types
from google.genai.types import Modality

import config
from errors import GenerationError
from image_codec import ImageAsset, to_data_url
from system_prompt import DESCRIPTION_PROMPT, SKETCH_PROMPT, NO_TEXT_RESPONSE

logger = logging.getLogger(__name__)

client = genai.Client(
    api_key=config.GEMINI_API_KEY,
    http_options=types.HttpOptions(timeout=config.GEMINI_TIMEOUT_MS),
)

EditResult = namedtuple("EditResult", ["image", "text"])


def _image_part(asset):
    return types.Part.from_bytes(data=asset.raw_bytes, mime_type=asset.mime_type)


def _image_config():
    # The image model refuses requests that don't ask for both modalities.
    return types.GenerateContentConfig(
        response_modalities=[Modality.IMAGE, Modality.TEXT],
    )


def _response_parts(response):
    if not response.candidates:
        return []
    content = response.candidates[0].content
    if content is None or not content.parts:
        return []
    return content.parts


def _inline_image(part):
    blob = part.inline_data
    if not blob or not blob.data:
        return None
    data = blob.data
    if isinstance(data, str):
        data = base64.b64decode(data)
    mime = blob.mime_type or "image/png"
    return ImageAsset(data_url=to_data_url(data, mime), mime_type=mime)


def generate_description(image):
    parts = [_image_part(image), types.Part.from_text(text=DESCRIPTION_PROMPT)]
    try:
        response = client.models.generate_content(
            model=config.DESCRIPTION_MODEL, contents=parts,
        )
        text = response.text
    except Exception as e:
        logger.exception("Error generating description")
        raise GenerationError("Failed to generate product description.") from e

    if not text:
        logger.warning("Description response contained no text")
        raise GenerationError("Failed to generate product description.")
    return text


def edit_image(main_image, auxiliary_images, prompt):
    """Apply ``prompt`` (and any reference images) to ``main_image``.

    If the model sends back several images or several text parts, the last
    of each is kept.
    """
    parts = [_image_part(main_image)]
    parts.extend(_image_part(img) for img in auxiliary_images)
    if prompt:
        parts.append(types.Part.from_text(text=prompt))

    try:
        response = client.models.generate_content(
            model=config.IMAGE_MODEL, contents=parts, config=_image_config(),
        )
        response_parts = _response_parts(response)
    except Exception as e:
        logger.exception("Error editing image")
        raise GenerationError("Failed to edit the product image.") from e

    image = None
    text = NO_TEXT_RESPONSE
    for part in response_parts:
        if part.inline_data:
            image = _inline_image(part) or image
        elif part.text:
            text = part.text

    if image is None:
        logger.warning("Edit response contained no image (%d parts)", len(response_parts))
        raise GenerationError("AI did not return an edited image.")
    return EditResult(image=image, text=text)


def generate_sketch(image):
    """Ask for a line drawing of ``image``; the first returned image wins."""
    parts = [_image_part(image), types.Part.from_text(text=SKETCH_PROMPT)]
    try:
        response = client.models.generate_content(
            model=config.IMAGE_MODEL, contents=parts, config=_image_config(),
        )
        response_parts = _response_parts(response)
    except Exception as e:
        logger.exception("Error generating sketch")
        raise GenerationError("Failed to generate product sketch.") from e

    for part in response_parts:
        if part.inline_data:
            sketch = _inline_image(part)
            if sketch is not None:
                return sketch

    logger.warning("Sketch response contained no image (%d parts)", len(response_parts))
    raise GenerationError("AI did not return a sketch.")
