"""Image generation, editing and variation calls."""

from __future__ import annotations

import io
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, BinaryIO

from gptkit.form_builder import FormBuilder
from gptkit.request_builder import ApiCall

CREATE_IMAGE_SIZE_256X256 = "256x256"
CREATE_IMAGE_SIZE_512X512 = "512x512"
CREATE_IMAGE_SIZE_1024X1024 = "1024x1024"
# dall-e-3 only
CREATE_IMAGE_SIZE_1792X1024 = "1792x1024"
CREATE_IMAGE_SIZE_1024X1792 = "1024x1792"

CREATE_IMAGE_RESPONSE_FORMAT_URL = "url"
CREATE_IMAGE_RESPONSE_FORMAT_B64_JSON = "b64_json"

CREATE_IMAGE_MODEL_DALL_E_2 = "dall-e-2"
CREATE_IMAGE_MODEL_DALL_E_3 = "dall-e-3"

CREATE_IMAGE_QUALITY_HD = "hd"
CREATE_IMAGE_QUALITY_STANDARD = "standard"

CREATE_IMAGE_STYLE_VIVID = "vivid"
CREATE_IMAGE_STYLE_NATURAL = "natural"

BuilderFactory = Callable[[BinaryIO], Any]


@dataclass
class ImageRequest:
    prompt: str = ""
    model: str = ""
    n: int = 0
    quality: str = ""
    size: str = ""
    style: str = ""
    response_format: str = ""
    user: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Fields that are set; empty strings and zero are left out."""
        fields = (
            ("prompt", self.prompt),
            ("model", self.model),
            ("n", self.n),
            ("quality", self.quality),
            ("size", self.size),
            ("style", self.style),
            ("response_format", self.response_format),
            ("user", self.user),
        )
        return {key: value for key, value in fields if value}


@dataclass
class ImageResponseData:
    url: str = ""
    b64_json: str = ""
    revised_prompt: str = ""


@dataclass
class ImageResponse:
    created: int = 0
    data: list[ImageResponseData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImageResponse:
        return cls(
            created=data.get("created") or 0,
            data=[
                ImageResponseData(
                    url=item.get("url") or "",
                    b64_json=item.get("b64_json") or "",
                    revised_prompt=item.get("revised_prompt") or "",
                )
                for item in data.get("data") or []
            ],
        )


@dataclass
class ImageEditRequest:
    image: BinaryIO | None = None
    mask: BinaryIO | None = None
    prompt: str = ""
    n: int = 0
    size: str = ""
    response_format: str = ""


@dataclass
class ImageVariationRequest:
    image: BinaryIO | None = None
    n: int = 0
    size: str = ""
    response_format: str = ""


def create_image(request: ImageRequest) -> ApiCall:
    """Call that generates images from a prompt."""
    return ApiCall(
        "POST", "/images/generations", body=request.to_dict(), parse=ImageResponse.from_dict
    )


def _multipart_call(path: str, body: io.BytesIO, builder: Any) -> ApiCall:
    return ApiCall(
        "POST",
        path,
        body=body.getvalue(),
        headers={"Content-Type": builder.content_type()},
        parse=ImageResponse.from_dict,
    )


def create_edit_image(
    request: ImageEditRequest, builder_factory: BuilderFactory = FormBuilder
) -> ApiCall:
    """Call that edits an image; the mask is sent only when given."""
    body = io.BytesIO()
    builder = builder_factory(body)
    builder.create_form_file("image", request.image)
    if request.mask is not None:
        builder.create_form_file("mask", request.mask)
    builder.write_field("prompt", request.prompt)
    builder.write_field("n", str(request.n))
    builder.write_field("size", request.size)
    builder.write_field("response_format", request.response_format)
    builder.close()
    return _multipart_call("/images/edits", body, builder)


def create_variation_image(
    request: ImageVariationRequest, builder_factory: BuilderFactory = FormBuilder
) -> ApiCall:
    """Call that creates variations of an image."""
    body = io.BytesIO()
    builder = builder_factory(body)
    builder.create_form_file("image", request.image)
    builder.write_field("n", str(request.n))
    builder.write_field("size", request.size)
    builder.write_field("response_format", request.response_format)
    builder.close()
    return _multipart_call("/images/variations", body, builder)