from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Iterable, Optional

from codegate.domain.entities import CodeKind

DEFAULT_LOGIN_PATTERN = "/authentication/form"


def _segments(path: str) -> list[str]:
    return [s for s in path.split("/") if s]


def _match_segments(pattern: list[str], path: list[str]) -> bool:
    if not pattern:
        return not path
    head = pattern[0]
    if head == "**":
        # zero or more segments
        return any(
            _match_segments(pattern[1:], path[i:]) for i in range(len(path) + 1)
        )
    if not path:
        return False
    return fnmatchcase(path[0], head) and _match_segments(pattern[1:], path[1:])


def match_path(pattern: str, path: str) -> bool:
    """
    Ant-style match: `*` and `?` stay inside one segment, `**` spans any
    number of segments. Case-sensitive; the query string is ignored.
    """
    path = path.split("?", 1)[0]
    return _match_segments(_segments(pattern), _segments(path))


@dataclass(frozen=True)
class PathRule:
    pattern: str
    kind: CodeKind


@dataclass(frozen=True)
class PathRuleSet:
    """Ordered, immutable interception rules. First match wins."""

    rules: tuple[PathRule, ...]

    @classmethod
    def build(
        cls,
        image_urls: Iterable[str] = (),
        email_urls: Iterable[str] = (),
        default_pattern: str = DEFAULT_LOGIN_PATTERN,
    ) -> "PathRuleSet":
        rules = [PathRule(u, CodeKind.IMAGE) for u in image_urls]
        rules += [PathRule(u, CodeKind.EMAIL) for u in email_urls]
        rules.append(PathRule(default_pattern, CodeKind.IMAGE))
        return cls(tuple(rules))

    def match(self, path: str) -> Optional[PathRule]:
        for rule in self.rules:
            if match_path(rule.pattern, path):
                return rule
        return None

    def __len__(self) -> int:
        return len(self.rules)
