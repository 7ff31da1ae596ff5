import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from codegate.domain.entities import CodeKind
from codegate.main import create_app
from codegate.settings import Settings
from tests.fakes import FakeCodeStore, FakeGenerator, FakeSender

SESSION_COOKIE = "CODEGATE_SESSION"


def make_settings(**overrides) -> Settings:
    values = {
        "image_code_urls": "/user/*",
        "email_code_urls": "/pay/**",
        "session_cookie_name": SESSION_COOKIE,
    }
    values.update(overrides)
    return Settings(**values)


def add_echo_routes(app) -> None:
    """Downstream handlers for the configured patterns; they echo what they got."""

    async def echo(request: Request) -> dict:
        return {"reached": request.url.path, "body": (await request.body()).decode()}

    app.add_api_route("/user/{user_id}", echo, methods=["POST"])
    app.add_api_route("/pay/{rest:path}", echo, methods=["POST"])


@pytest.fixture()
def app_and_deps():
    store = FakeCodeStore()
    sender = FakeSender()
    app = create_app(
        settings=make_settings(),
        generators={
            CodeKind.IMAGE: FakeGenerator("7f3k"),
            CodeKind.EMAIL: FakeGenerator("482913", CodeKind.EMAIL),
        },
        senders={CodeKind.EMAIL: sender},
        code_store=store,
    )
    add_echo_routes(app)
    yield app, store, sender


@pytest.fixture()
def client(app_and_deps):
    app, _, _ = app_and_deps
    c = TestClient(app, raise_server_exceptions=False)
    c.cookies.set(SESSION_COOKIE, "s1")
    return c
