from google.genai import types

from image_codec import ImageAsset, to_data_url


def make_asset(raw=b"image-bytes", mime="image/png"):
    return ImageAsset(data_url=to_data_url(raw, mime), mime_type=mime)


def image_part(data, mime="image/png"):
    return types.Part(inline_data=types.Blob(data=data, mime_type=mime))


def text_part(text):
    return types.Part(text=text)


def make_response(*parts):
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))]
    )


class FakeModels:
    def __init__(self):
        self.calls = []
        self.responses = []
        self.error = None

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


class FakeClient:
    def __init__(self):
        self.models = FakeModels()

    def queue(self, *responses):
        self.models.responses.extend(responses)


class FakeService:
    """Stands in for gemini_service inside a ProductSession."""

    def __init__(self):
        self.calls = []
        self.description = "A product"
        self.sketch = make_asset(b"sketch")
        self.edit_result = None
        self.error = None
        self.on_call = None

    def _call(self, name, *args):
        self.calls.append((name, args))
        if self.on_call is not None:
            self.on_call(name)
        if self.error is not None:
            raise self.error

    def generate_description(self, image):
        self._call("generate_description", image)
        return self.description

    def generate_sketch(self, image):
        self._call("generate_sketch", image)
        return self.sketch

    def edit_image(self, main_image, auxiliary_images, prompt):
        self._call("edit_image", main_image, auxiliary_images, prompt)
        return self.edit_result
