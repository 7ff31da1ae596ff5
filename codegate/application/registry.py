from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from codegate.domain.entities import CodeKind
from codegate.domain.errors import UnsupportedCodeKind
from codegate.domain.ports.code_generator import CodeGeneratorPort
from codegate.domain.ports.code_sender import CodeSenderPort


@dataclass(frozen=True)
class CodeRegistry:
    """
    Generator/sender per code kind, resolved once at startup.
    Kinds without a sender are delivered in-band (e.g. image in the response).
    """

    generators: Mapping[CodeKind, CodeGeneratorPort]
    senders: Mapping[CodeKind, CodeSenderPort]

    def generator_for(self, kind: CodeKind) -> CodeGeneratorPort:
        try:
            return self.generators[kind]
        except KeyError:
            raise UnsupportedCodeKind(kind.value) from None

    def sender_for(self, kind: CodeKind) -> CodeSenderPort | None:
        return self.senders.get(kind)


def build_code_registry(
    default_generators: Mapping[CodeKind, CodeGeneratorPort],
    default_senders: Mapping[CodeKind, CodeSenderPort],
    *,
    generators: Mapping[CodeKind, CodeGeneratorPort] | None = None,
    senders: Mapping[CodeKind, CodeSenderPort] | None = None,
) -> CodeRegistry:
    """
    Use the application's implementation for a kind when it supplies one,
    otherwise install the default.
    """
    resolved_generators = {**default_generators, **(generators or {})}
    resolved_senders = {**default_senders, **(senders or {})}
    return CodeRegistry(
        generators=MappingProxyType(resolved_generators),
        senders=MappingProxyType(resolved_senders),
    )
