from fastapi import Request

from codegate.application.registry import CodeRegistry
from codegate.domain.ports.code_store import CodeStorePort


# These are set in codegate.main create_app()
def get_code_registry(request: Request) -> CodeRegistry:
    return request.app.state.code_registry


def get_code_store(request: Request) -> CodeStorePort:
    return request.app.state.code_store


def get_key_prefix(request: Request) -> str:
    return request.app.state.settings.code_session_key_prefix


def get_session_id(request: Request) -> str:
    # Set by SessionIdMiddleware
    return request.state.session_id
