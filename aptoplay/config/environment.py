"""Environment variable loading and validation."""

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import ClientConfig, LogFormat, LogLevel


class EnvironmentConfig:
    """Credentials and settings read from the process environment."""

    def __init__(
        self,
        title_id: str,
        secret_key: str,
        client: ClientConfig,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
    ):
        self.title_id = title_id
        self.secret_key = secret_key
        self.client = client
        self.log_level = log_level or LogLevel.INFO.value
        self.log_format = log_format or LogFormat.KEY_VALUE.value


def load_environment_config(dotenv_path: Optional[str] = None) -> EnvironmentConfig:
    """
    Load and validate SDK settings from environment variables.

    A ``.env`` file is read first, without overriding variables already set.
    Without ``dotenv_path`` it is searched for from the current directory upward.

    Required environment variables:
    - APTOPLAY_TITLE_ID: PlayFab title ID
    - APTOPLAY_SECRET_KEY: PlayFab title secret key (X-SecretKey)

    Optional environment variables:
    - APTOPLAY_HTTP_TIMEOUT: request timeout in seconds (5-300)
    - APTOPLAY_USER_AGENT: User-Agent header
    - APTOPLAY_NODE_URL: Aptos fullnode REST URL
    - APTOPLAY_FAUCET_URL: Aptos faucet URL
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL
    - LOG_FORMAT: json or key-value

    Returns:
        EnvironmentConfig with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))

    errors = []

    title_id = os.getenv("APTOPLAY_TITLE_ID")
    secret_key = os.getenv("APTOPLAY_SECRET_KEY")
    timeout_str = os.getenv("APTOPLAY_HTTP_TIMEOUT")
    log_level = os.getenv("LOG_LEVEL")
    log_format = os.getenv("LOG_FORMAT")

    if not title_id:
        errors.append("Missing required environment variable: APTOPLAY_TITLE_ID")

    if not secret_key:
        errors.append("Missing required environment variable: APTOPLAY_SECRET_KEY")

    client_settings = {}
    if timeout_str:
        try:
            client_settings["http_request_timeout"] = int(timeout_str)
        except ValueError:
            errors.append(
                f"Invalid APTOPLAY_HTTP_TIMEOUT: '{timeout_str}'. Must be a valid integer."
            )

    for env_name, field_name in (
        ("APTOPLAY_USER_AGENT", "user_agent"),
        ("APTOPLAY_NODE_URL", "aptos_node_url"),
        ("APTOPLAY_FAUCET_URL", "aptos_faucet_url"),
    ):
        value = os.getenv(env_name)
        if value:
            client_settings[field_name] = value

    if log_level and log_level.upper() not in LogLevel.__members__:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(LogLevel.__members__)}"
        )

    valid_formats = [f.value for f in LogFormat]
    if log_format and log_format not in valid_formats:
        errors.append(
            f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(valid_formats)}"
        )

    client_config = None
    try:
        client_config = ClientConfig(**client_settings)
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            errors.append(f"{location}: {error['msg']}")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            hints=[
                "Copy .env.example to .env and fill in your PlayFab credentials",
                "Ensure APTOPLAY_TITLE_ID and APTOPLAY_SECRET_KEY are set",
                "Verify APTOPLAY_HTTP_TIMEOUT is a number between 5 and 300",
            ],
        )

    return EnvironmentConfig(
        title_id=title_id,
        secret_key=secret_key,
        client=client_config,
        log_level=log_level.upper() if log_level else None,
        log_format=log_format,
    )
