from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    posts_dir: str = "posts"
    per_page: int = Field(default=5, ge=1)
    site_title: str = "Arsmp"

    host: str = "127.0.0.1"
    port: int = 8080

    static_dir: str = "static"

    # Feed
    rss_limit: int = Field(default=20, ge=1)
    excerpt_length: int = Field(default=200, ge=1)

    # Hot reload (debounce 0 = one reload per filesystem event)
    watch_enabled: bool = True
    reload_debounce_seconds: float = Field(default=0.0, ge=0.0)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="MDBLOG_",
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
