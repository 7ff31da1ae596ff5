import json
import pytest
import httpx

from codegate.domain.errors import SendError
from codegate.infrastructure.email.http_smtp_adapter import HttpSmtpEmailAdapter


def _adapter(handler) -> tuple[HttpSmtpEmailAdapter, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    adapter = HttpSmtpEmailAdapter(
        base_url="http://smtp-mock:8025/",
        client=client,
        send_path="send",
    )
    return adapter, client


@pytest.mark.asyncio
async def test_send_posts_json_to_relay():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["json"] = json.loads(request.content.decode("utf-8"))
        return httpx.Response(202, text="Accepted")

    adapter, client = _adapter(handler)

    await adapter.send(to="a@a.com", subject="Your code", body="Your code is 1234")
    assert seen["url"] == "http://smtp-mock:8025/send"
    assert seen["json"] == {"to": "a@a.com", "subject": "Your code", "body": "Your code is 1234"}

    await client.aclose()


@pytest.mark.asyncio
async def test_non_2xx_raises_send_error():
    adapter, client = _adapter(lambda _: httpx.Response(422, text="nope"))

    with pytest.raises(SendError) as ei:
        await adapter.send(to="x@y.com", subject="S", body="B")

    msg = str(ei.value)
    assert "mail relay responded 422" in msg
    assert "nope" in msg

    await client.aclose()


@pytest.mark.asyncio
async def test_network_error_is_wrapped_as_send_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    adapter, client = _adapter(handler)

    with pytest.raises(SendError, match="mail relay HTTP error:"):
        await adapter.send(to="x@y.com", subject="S", body="B")

    await client.aclose()


@pytest.mark.asyncio
async def test_aclose_closes_owned_client_only():
    owned = HttpSmtpEmailAdapter(base_url="http://smtp-mock:8025")
    await owned.aclose()
    assert owned._client.is_closed  # type: ignore[attr-defined]

    adapter, shared_client = _adapter(lambda _: httpx.Response(200))
    await adapter.aclose()
    assert shared_client.is_closed is False

    await shared_client.aclose()
