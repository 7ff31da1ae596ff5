from __future__ import annotations

import asyncio
import logging

from captcha.image import ImageCaptcha

import codegate.domain.services as domain_services
from codegate.domain.entities import CodeKind, ImageCode, RequestContext
from codegate.domain.errors import GenerationError

logger = logging.getLogger("codegate.infrastructure.codes.image_generator")

_MIN_SIDE = 20
_MAX_SIDE = 1000


def _side(request: RequestContext, name: str, default: int) -> int:
    value = request.get_int(name, default)
    if not (_MIN_SIDE <= value <= _MAX_SIDE):
        return default
    return value


def render_png(text: str, width: int, height: int) -> bytes:
    image = ImageCaptcha(width=width, height=height)
    return image.generate(text, format="png").getvalue()


class ImageCodeGenerator:
    """
    Random glyphs rendered to a PNG. The request may ask for a different
    size through the `width` / `height` query parameters.
    """

    def __init__(
        self,
        *,
        length: int = 4,
        width: int = 160,
        height: int = 60,
        ttl_seconds: int = 120,
    ) -> None:
        if length < 1:
            raise ValueError("length must be positive")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._length = length
        self._width = width
        self._height = height
        self._ttl = ttl_seconds

    async def generate(self, request: RequestContext) -> ImageCode:
        width = _side(request, "width", self._width)
        height = _side(request, "height", self._height)
        text = domain_services.generate_text_code(self._length)
        try:
            png = await asyncio.to_thread(render_png, text, width, height)
        except Exception as e:  # noqa: BLE001
            logger.warning("image rendering failed", extra={"error": str(e)})
            raise GenerationError(f"image rendering failed: {e}") from e
        return ImageCode.with_ttl(text, self._ttl, CodeKind.IMAGE, image=png)
