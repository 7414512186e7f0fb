from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class FormatterSettings(BaseSettings):
    # Output
    pretty_print: bool = False
    print_details: bool = False
    indent: str = "    "
    date_format: Optional[str] = None  # strftime pattern; ISO-8601 when unset

    # Diagnostics for the formatters themselves
    log_level: str = "INFO"
    log_format: str = "console"  # json or console

    model_config = SettingsConfigDict(
        env_prefix="RECORDFMT_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache()
def get_settings() -> FormatterSettings:
    return FormatterSettings()
