"""PlayFab facade: the public entry point of the SDK."""

import time
from typing import Any, Dict, Iterable, List, Optional, Type

import requests

from aptoplay.config import ClientConfig, ConfigurationError, load_environment_config
from aptoplay.logging import get_logger, log_context
from aptoplay.normalization import JSONValue, normalize_error, normalize_keys
from aptoplay.transport import BaseClient, TransportError

from .aptos import AptosClient
from .google import GoogleProfileClient
from .models import ErrorKind, PlayFabModel, StatisticUpdate, StatisticVersion

logger = get_logger(__name__, component="playfab")


class AptoPlay(BaseClient):
    """Client for a PlayFab title, with Google social login and Aptos minting.

    Every public method returns PlayFab's ``data`` payload with its keys
    converted to camelCase, and raises AptoPlayError on any failure.

    Example:
        >>> client = AptoPlay("A1B2C", "secret")
        >>> user = client.login("player@example.com", "hunter22")
        >>> user["playFabId"]
    """

    def __init__(
        self,
        title_id: str,
        secret_key: str,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize client for one PlayFab title.

        Args:
            title_id: PlayFab title ID
            secret_key: Title secret key, sent as X-SecretKey on server API calls
            config: Transport and endpoint settings
            session: Session to reuse across the PlayFab, Google and Aptos calls

        Raises:
            ConfigurationError: If title_id or secret_key is empty
        """
        errors = []
        if not title_id or not title_id.strip():
            errors.append("title_id cannot be empty")
        if not secret_key or not secret_key.strip():
            errors.append("secret_key cannot be empty")
        if errors:
            raise ConfigurationError("Invalid AptoPlay credentials", errors=errors)

        super().__init__(config=config, session=session)

        self._title_id = title_id.strip()
        self._secret_key = secret_key.strip()
        self._base_url = self.config.playfab_base_url or f"https://{self._title_id}.playfabapi.com"

        self.google = GoogleProfileClient(config=self.config, session=self._session)
        self.aptos = AptosClient(config=self.config, session=self._session)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "AptoPlay":
        """Build a client from APTOPLAY_* environment variables (and .env)."""
        env = load_environment_config(dotenv_path)
        return cls(env.title_id, env.secret_key, config=env.client)

    @property
    def title_id(self) -> str:
        return self._title_id

    @property
    def secret_key(self) -> str:
        return self._secret_key

    @property
    def base_url(self) -> str:
        """PlayFab API endpoint of the title."""
        return self._base_url

    def _call(self, kind: str, path: str, body: Dict[str, Any], server: bool = False) -> JSONValue:
        """POST to a PlayFab endpoint and return its normalized ``data`` payload.

        Server API calls authenticate with the title secret key.
        """
        headers = {"X-SecretKey": self._secret_key} if server else None

        with log_context(operation=kind, title_id=self._title_id):
            try:
                envelope = self._make_request(
                    f"{self._base_url}{path}",
                    method="POST",
                    headers=headers,
                    json_data=body,
                )
            except TransportError as e:
                logger.warning(
                    f"PlayFab call to {path} failed",
                    extra={"event": "playfab.call.failed", "path": path, "status_code": e.status_code},
                )
                raise normalize_error(kind, e) from e

            if not isinstance(envelope, dict) or not isinstance(envelope.get("data"), dict):
                raise normalize_error(
                    kind, ValueError(f"Unexpected PlayFab response envelope from {path}")
                )

            logger.debug(
                f"PlayFab call to {path} succeeded",
                extra={"event": "playfab.call.succeeded", "path": path},
            )
            return normalize_keys(envelope["data"])

    @staticmethod
    def _require(kind: str, **values: Optional[str]) -> None:
        for name, value in values.items():
            if not isinstance(value, str) or not value.strip():
                raise normalize_error(kind, ValueError(f"{name} is required"))

    @staticmethod
    def _to_requests(kind: str, items: Iterable[Any], model: Type[PlayFabModel]) -> List[dict]:
        if isinstance(items, (str, bytes)) or not isinstance(items, Iterable):
            raise normalize_error(kind, TypeError(f"Expected a list of {model.__name__}"))

        payload = []
        for item in items:
            if not isinstance(item, model):
                raise normalize_error(
                    kind, TypeError(f"Expected {model.__name__}, got {type(item).__name__}")
                )
            payload.append(item.to_request())
        return payload

    def register_user(self, email: str, password: str, username: Optional[str] = None) -> JSONValue:
        """Register a PlayFab user with email and password.

        Args:
            email: Email of the user
            password: Password of the user
            username: PlayFab username (3-20 characters); defaults to the
                current epoch time in milliseconds

        Returns:
            Registration result (playFabId, sessionTicket, ...)
        """
        kind = ErrorKind.REGISTER_WITH_EMAIL.value
        self._require(kind, email=email, password=password)

        return self._call(
            kind,
            "/Client/RegisterPlayFabUser",
            {
                "TitleId": self._title_id,
                "Email": email,
                "Password": password,
                "Username": username or str(int(time.time() * 1000)),
            },
        )

    def login(self, email: str, password: str) -> JSONValue:
        """Log in with email and password."""
        kind = ErrorKind.LOGIN_WITH_EMAIL.value
        self._require(kind, email=email, password=password)

        return self._call(
            kind,
            "/Client/LoginWithEmailAddress",
            {"TitleId": self._title_id, "Email": email, "Password": password},
        )

    def register_with_google_account(self, access_token: str) -> JSONValue:
        """Log in with a Google account, creating the PlayFab user if needed.

        The Google profile email is looked up first and added to the result
        under ``email``.
        """
        with log_context(operation=ErrorKind.GOOGLE_SOCIAL_REGISTER.value, title_id=self._title_id):
            email = self.google.get_email(access_token)

        result = self._call(
            ErrorKind.GOOGLE_SOCIAL_REGISTER.value,
            "/Client/LoginWithGoogleAccount",
            {
                "TitleId": self._title_id,
                "CreateAccount": True,
                "AccessToken": access_token.strip(),
            },
        )
        return {**result, "email": email}

    def validate_session_ticket(self, session_ticket: str) -> JSONValue:
        """Check a client session ticket and return the ticket's user info."""
        kind = ErrorKind.VALIDATE_SESSION.value
        self._require(kind, session_ticket=session_ticket)

        return self._call(
            kind,
            "/Server/AuthenticateSessionTicket",
            {"SessionTicket": session_ticket},
            server=True,
        )

    def get_user_statistics(
        self,
        playfab_id: str,
        statistic_names: Optional[Iterable[str]] = None,
        statistic_versions: Optional[Iterable[StatisticVersion]] = None,
    ) -> JSONValue:
        """Return a player's statistics.

        Args:
            playfab_id: PlayFab ID of the player
            statistic_names: Only return these statistics (current version)
            statistic_versions: Only return these statistics at the given versions
        """
        kind = ErrorKind.GET_STATISTICS.value
        self._require(kind, playfab_id=playfab_id)

        body: Dict[str, Any] = {"PlayFabId": playfab_id}
        if statistic_names is not None:
            # a bare string is one name, not a sequence of characters
            if isinstance(statistic_names, str):
                statistic_names = [statistic_names]
            names = list(statistic_names) if isinstance(statistic_names, Iterable) else None
            if names is None or not all(isinstance(name, str) for name in names):
                raise normalize_error(kind, TypeError("statistic_names must be strings"))
            body["StatisticNames"] = names
        if statistic_versions is not None:
            body["StatisticNameVersions"] = self._to_requests(kind, statistic_versions, StatisticVersion)

        return self._call(kind, "/Server/GetPlayerStatistics", body, server=True)

    def get_statistic_versions(self, statistic_name: str) -> JSONValue:
        """Return the reset history of a title statistic."""
        kind = ErrorKind.GET_STATISTIC_VERSIONS.value
        self._require(kind, statistic_name=statistic_name)

        return self._call(
            kind,
            "/Server/GetPlayerStatisticVersions",
            {"StatisticName": statistic_name},
            server=True,
        )

    def update_user_statistics(
        self, playfab_id: str, statistics: List[StatisticUpdate]
    ) -> JSONValue:
        """Set new values for a player's statistics."""
        kind = ErrorKind.UPDATE_STATISTICS.value
        self._require(kind, playfab_id=playfab_id)
        if not statistics:
            raise normalize_error(kind, ValueError("statistics cannot be empty"))

        return self._call(
            kind,
            "/Server/UpdatePlayerStatistics",
            {
                "PlayFabId": playfab_id,
                "Statistics": self._to_requests(kind, statistics, StatisticUpdate),
            },
            server=True,
        )

    def mint_token(self, address: str, amount: int) -> List[str]:
        """Mint ``amount`` octas into ``address`` through the Aptos faucet."""
        with log_context(operation=ErrorKind.APTOS_MINT.value):
            return self.aptos.mint(address, amount)

    def get_account_balance(self, address: str) -> int:
        """Return the AptosCoin balance of ``address`` in octas."""
        with log_context(operation=ErrorKind.APTOS_GET_BALANCE.value):
            return self.aptos.get_balance(address)
