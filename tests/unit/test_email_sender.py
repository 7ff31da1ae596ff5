import pytest

from codegate.domain.entities import CodeKind, ValidateCode
from codegate.domain.errors import SendError
from codegate.infrastructure.codes.email_sender import EmailCodeSender
from tests.fakes import FakeEmailDown


@pytest.mark.asyncio
async def test_send_formats_message(email):
    sender = EmailCodeSender(email, subject="Login code")
    code = ValidateCode.with_ttl("482913", 300, CodeKind.EMAIL)

    await sender.send("a@example.com", code)

    assert len(email.calls) == 1
    call = email.calls[0]
    assert call["to"] == "a@example.com"
    assert call["subject"] == "Login code"
    assert "482913" in call["body"]
    assert "5 minute(s)" in call["body"]


@pytest.mark.asyncio
async def test_transport_failure_propagates_as_send_error():
    sender = EmailCodeSender(FakeEmailDown())
    code = ValidateCode.with_ttl("482913", 300, CodeKind.EMAIL)

    with pytest.raises(SendError, match="500"):
        await sender.send("a@example.com", code)
