from contextlib import asynccontextmanager
from typing import Mapping

from fastapi import FastAPI

from codegate.application.registry import build_code_registry
from codegate.domain.entities import CodeKind
from codegate.domain.path_matcher import PathRuleSet
from codegate.domain.ports.code_generator import CodeGeneratorPort
from codegate.domain.ports.code_sender import CodeSenderPort
from codegate.domain.ports.code_store import CodeStorePort
from codegate.infrastructure.codes.email_generator import EmailCodeGenerator
from codegate.infrastructure.codes.email_sender import EmailCodeSender
from codegate.infrastructure.codes.image_generator import ImageCodeGenerator
from codegate.infrastructure.email.http_smtp_adapter import HttpSmtpEmailAdapter
from codegate.infrastructure.redis_cache.code_store import RedisCodeStore
from codegate.infrastructure.redis_cache.pool import close_redis, get_redis
from codegate.logging import setup_logging
from codegate.presentation.api import api
from codegate.presentation.failure_handler import FailureHandler, JsonFailureHandler
from codegate.presentation.session import SessionIdMiddleware
from codegate.presentation.validate_code_filter import (
    ValidateCodeMiddleware,
    check_configuration,
)
from codegate.settings import Settings, get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        # shutdown
        await app.state.email_adapter.aclose()
        # Only the client this app opened; injected stores are the caller's.
        if app.state.owns_redis:
            await close_redis()


def create_app(
    *,
    settings: Settings | None = None,
    generators: Mapping[CodeKind, CodeGeneratorPort] | None = None,
    senders: Mapping[CodeKind, CodeSenderPort] | None = None,
    failure_handler: FailureHandler | None = None,
    code_store: CodeStorePort | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    app = FastAPI(title="Verification Code Gate", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    # One email adapter for the app; it owns its HTTP client.
    email_adapter = HttpSmtpEmailAdapter(base_url=settings.smtp_base_url)
    app.state.email_adapter = email_adapter

    app.state.code_registry = build_code_registry(
        {
            CodeKind.IMAGE: ImageCodeGenerator(
                length=settings.image_code_length,
                width=settings.image_code_width,
                height=settings.image_code_height,
                ttl_seconds=settings.image_code_ttl_seconds,
            ),
            CodeKind.EMAIL: EmailCodeGenerator(
                length=settings.email_code_length,
                ttl_seconds=settings.email_code_ttl_seconds,
            ),
        },
        {
            CodeKind.EMAIL: EmailCodeSender(
                email_adapter, subject=settings.email_code_subject
            ),
        },
        generators=generators,
        senders=senders,
    )

    app.state.owns_redis = code_store is None
    if code_store is None:
        code_store = RedisCodeStore(
            get_redis(settings.redis_url), ttl_seconds=settings.session_ttl_seconds
        )
    app.state.code_store = code_store

    rules = PathRuleSet.build(
        image_urls=settings.image_code_url_list,
        email_urls=settings.email_code_url_list,
    )
    failure_handler = failure_handler or JsonFailureHandler()
    # add_middleware builds lazily; fail here rather than on the first request.
    check_configuration(rules, failure_handler, code_store)

    # Added last = outermost: the session id must exist before validation runs.
    app.add_middleware(
        ValidateCodeMiddleware,
        rules=rules,
        failure_handler=failure_handler,
        store=code_store,
        key_prefix=settings.code_session_key_prefix,
    )
    app.add_middleware(
        SessionIdMiddleware,
        cookie_name=settings.session_cookie_name,
        max_age=settings.session_ttl_seconds,
    )

    app.include_router(api)
    return app


app = create_app()
