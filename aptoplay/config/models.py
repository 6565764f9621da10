"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
DEFAULT_APTOS_NODE_URL = "https://fullnode.devnet.aptoslabs.com/v1"
DEFAULT_APTOS_FAUCET_URL = "https://faucet.devnet.aptoslabs.com"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class ClientConfig(BaseModel):
    """Transport and endpoint settings shared by every SDK client.

    Defaults point at the public PlayFab title host, Google's OAuth userinfo
    endpoint and the Aptos devnet node and faucet.
    """

    http_request_timeout: int = Field(
        30, ge=5, le=300, description="HTTP request timeout in seconds"
    )
    user_agent: str = Field(
        "AptoPlaySDK/1.0", min_length=1, description="User-Agent header for HTTP requests"
    )
    playfab_base_url: Optional[str] = Field(
        None, description="Override for https://{title_id}.playfabapi.com"
    )
    google_userinfo_url: str = Field(
        DEFAULT_GOOGLE_USERINFO_URL, description="Google OAuth2 userinfo endpoint"
    )
    aptos_node_url: str = Field(DEFAULT_APTOS_NODE_URL, description="Aptos fullnode REST API")
    aptos_faucet_url: str = Field(DEFAULT_APTOS_FAUCET_URL, description="Aptos faucet service")

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from the user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty or whitespace-only")
        return stripped

    @field_validator("playfab_base_url", "google_userinfo_url", "aptos_node_url", "aptos_faucet_url")
    @classmethod
    def normalize_url(cls, v: Optional[str]) -> Optional[str]:
        """Require an http(s) scheme and drop trailing slashes."""
        if v is None:
            return None
        stripped = v.strip().rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError(f"URL must start with http:// or https://, got: {v!r}")
        return stripped
