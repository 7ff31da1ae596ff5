from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_urls(raw: str) -> list[str]:
    return [u.strip() for u in raw.split(",") if u.strip()]


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    redis_url: str = "redis://redis:6379/0"
    smtp_base_url: str = "http://smtp-mock:8025"

    # Session
    session_cookie_name: str = "CODEGATE_SESSION"
    session_ttl_seconds: int = Field(1800, gt=0)

    # Verification codes
    code_session_key_prefix: str = "SESSION_KEY_"

    image_code_length: int = Field(4, gt=0)
    image_code_width: int = 160
    image_code_height: int = 60
    image_code_ttl_seconds: int = Field(120, gt=0)
    image_code_urls: str = ""

    email_code_length: int = Field(6, gt=0)
    email_code_ttl_seconds: int = Field(300, gt=0)
    email_code_urls: str = ""
    email_code_subject: str = "Your verification code"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def image_code_url_list(self) -> list[str]:
        return _split_urls(self.image_code_urls)

    @property
    def email_code_url_list(self) -> list[str]:
        return _split_urls(self.email_code_urls)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
