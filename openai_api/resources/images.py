"""Image generation, edits and variations."""

from __future__ import annotations

from typing import Any, List

from ..core.models import BaseModel, decode, multipart_fields
from ..core.transport import HTTPTransport


class ImageGenerationRequest(BaseModel):
    def __init__(
        self,
        prompt: str,
        model=None,
        n: int = None,
        size: str = None,
        quality: str = None,
        style: str = None,
        response_format: str = None,
        user: str = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.prompt = prompt
        self.model = model
        self.n = n
        self.size = size
        self.quality = quality
        self.style = style
        self.response_format = response_format
        self.user = user


class ImageEditRequest(BaseModel):
    """``image`` and ``mask`` are uploads: a path, bytes, tuple or file object."""

    def __init__(
        self,
        image: Any,
        prompt: str,
        mask: Any = None,
        model=None,
        n: int = None,
        size: str = None,
        response_format: str = None,
        user: str = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.image = image
        self.prompt = prompt
        self.mask = mask
        self.model = model
        self.n = n
        self.size = size
        self.response_format = response_format
        self.user = user


class ImageVariationRequest(BaseModel):
    def __init__(
        self,
        image: Any,
        model=None,
        n: int = None,
        size: str = None,
        response_format: str = None,
        user: str = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.image = image
        self.model = model
        self.n = n
        self.size = size
        self.response_format = response_format
        self.user = user


class ImageData(BaseModel):
    def __init__(self, url: str = None, b64_json: str = None, revised_prompt: str = None, **kwargs):
        super().__init__(**kwargs)
        self.url = url
        self.b64_json = b64_json
        self.revised_prompt = revised_prompt


class ImageResponse(BaseModel):
    _nested = {"data": [ImageData]}

    def __init__(self, data: List[ImageData], created: int = None, **kwargs):
        super().__init__(**kwargs)
        self.created = created
        self.data = data


class Images:
    """Images resource."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def generate(self, request: ImageGenerationRequest) -> ImageResponse:
        response = self._transport.post("/images/generations", body=request.to_dict())
        return decode(response, ImageResponse)

    def edit(self, request: ImageEditRequest) -> ImageResponse:
        fields, files = multipart_fields(request, ("image", "mask"))
        return decode(self._transport.post_multipart("/images/edits", fields, files), ImageResponse)

    def create_variation(self, request: ImageVariationRequest) -> ImageResponse:
        fields, files = multipart_fields(request, ("image",))
        return decode(self._transport.post_multipart("/images/variations", fields, files), ImageResponse)
