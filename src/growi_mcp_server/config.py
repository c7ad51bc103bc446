from typing import Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    growi_api_base_url: str = "https://growi.myasp.jp/_api/v3"

    # Process-wide fallback; a call-scoped token always takes precedence.
    growi_api_token: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("growi_api_token", "apiToken"),
    )

    # GROWI page grant (1 = public)
    growi_default_grant: int = 1

    # Seconds; None disables the timeout entirely
    http_timeout: Optional[float] = 30.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    def default_api_token(self) -> Optional[str]:
        if self.growi_api_token is None:
            return None
        return self.growi_api_token.get_secret_value() or None


settings = Settings()
