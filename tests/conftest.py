import pytest

from tests.fakes import FakeCodeStore, FakeEmailOK, FakeSender


@pytest.fixture()
def store():
    return FakeCodeStore()


@pytest.fixture()
def sender():
    return FakeSender()


@pytest.fixture()
def email():
    return FakeEmailOK()


@pytest.fixture(autouse=True)
def patch_codes(monkeypatch):
    """
    Make generated code values deterministic in all tests.
    You can override in a specific test by re-monkeypatching.
    """
    from codegate.domain import services as domain_services

    monkeypatch.setattr(domain_services, "generate_text_code", lambda length=4: "AB7K")
    monkeypatch.setattr(domain_services, "generate_numeric_code", lambda length=6: "482913")
    yield
