"""
Frontend configuration.

Loads frontend environment variables only.
"""

from typing import Literal

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Frontend application settings.

    Environment variables must be prefixed with:
        HIGHWAY_NOTES_

    Example:
        HIGHWAY_NOTES_ENV=production
        HIGHWAY_NOTES_API_URL_PROD=https://api.highwaynotes.app/api
    """

    # --------------------
    # Environment
    # --------------------
    ENV: Literal["development", "production"] = "development"

    # --------------------
    # Backend API
    # --------------------
    API_URL_LOCAL: str = Field(
        default="http://localhost:5000/api",
        description="Backend API base URL used in development builds",
        min_length=1,
    )
    API_URL_PROD: str = Field(
        default="http://localhost:5000/api",
        description="Backend API base URL used in production builds",
        min_length=1,
    )
    REQUEST_TIMEOUT: float = Field(default=10.0, gt=0)

    # --------------------
    # Session storage
    # --------------------
    STORAGE_SECRET: str = "dev-secret"
    TOKEN_STORAGE_KEY: str = "token"

    # --------------------
    # OTP resend throttle
    # --------------------
    OTP_MAX_REQUESTS: int = Field(default=5, ge=1)
    OTP_COOLDOWN_SECONDS: int = Field(default=60, ge=0)

    # --------------------
    # Web server
    # --------------------
    TITLE: str = "Highway Notes"
    PORT: int = 8080

    model_config = ConfigDict(
        env_file=".env",
        env_prefix="HIGHWAY_NOTES_",
        extra="ignore",
    )

    @property
    def api_base_url(self) -> str:
        """Base URL for the current build environment, without trailing slash."""
        url = self.API_URL_LOCAL if self.ENV == "development" else self.API_URL_PROD
        return url.rstrip("/")


settings = Settings()
