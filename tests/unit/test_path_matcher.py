import pytest

from codegate.domain.entities import CodeKind
from codegate.domain.path_matcher import (
    DEFAULT_LOGIN_PATTERN,
    PathRule,
    PathRuleSet,
    match_path,
)


@pytest.mark.parametrize(
    "pattern,path,expected",
    [
        ("/authentication/form", "/authentication/form", True),
        ("/user/*", "/user/42", True),
        ("/user/*", "/user/42/edit", False),
        ("/user/*", "/user", False),
        ("/user/**", "/user", True),
        ("/user/**", "/user/42/edit", True),
        ("/**/edit", "/user/42/edit", True),
        ("/user/*.html", "/user/me.html", True),
        ("/user/?", "/user/a", True),
        ("/user/?", "/user/ab", False),
        ("/User/*", "/user/42", False),
        ("/user/*", "/user/42?imageCode=abcd", True),
    ],
)
def test_match_path(pattern, path, expected):
    assert match_path(pattern, path) is expected


def test_first_match_wins_for_overlapping_patterns():
    rules = PathRuleSet(
        (PathRule("/a/*", CodeKind.IMAGE), PathRule("/a/b", CodeKind.EMAIL))
    )
    assert rules.match("/a/b") == PathRule("/a/*", CodeKind.IMAGE)


def test_disjoint_patterns_are_order_independent():
    one = PathRuleSet((PathRule("/a", CodeKind.IMAGE), PathRule("/b", CodeKind.EMAIL)))
    two = PathRuleSet(tuple(reversed(one.rules)))
    for path in ("/a", "/b", "/c"):
        assert one.match(path) == two.match(path)


def test_no_match_is_not_intercepted():
    rules = PathRuleSet.build()
    assert rules.match("/public/info") is None


def test_build_appends_default_login_rule_last():
    rules = PathRuleSet.build(image_urls=["/user/*"], email_urls=["/pay/**"])
    assert rules.rules == (
        PathRule("/user/*", CodeKind.IMAGE),
        PathRule("/pay/**", CodeKind.EMAIL),
        PathRule(DEFAULT_LOGIN_PATTERN, CodeKind.IMAGE),
    )


def test_default_rule_present_without_configuration():
    rules = PathRuleSet.build()
    assert len(rules) == 1
    assert rules.match("/authentication/form").kind is CodeKind.IMAGE


def test_rule_set_is_immutable():
    rules = PathRuleSet.build()
    with pytest.raises(AttributeError):
        rules.rules = ()  # type: ignore[misc]
