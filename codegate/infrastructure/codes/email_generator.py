from __future__ import annotations

import codegate.domain.services as domain_services
from codegate.domain.entities import CodeKind, RequestContext, ValidateCode


class EmailCodeGenerator:
    def __init__(self, *, length: int = 6, ttl_seconds: int = 300) -> None:
        if length < 1:
            raise ValueError("length must be positive")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._length = length
        self._ttl = ttl_seconds

    async def generate(self, request: RequestContext) -> ValidateCode:
        value = domain_services.generate_numeric_code(self._length)
        return ValidateCode.with_ttl(value, self._ttl, CodeKind.EMAIL)
