"""Unit tests for the AptoPlay facade and its Google and Aptos clients."""

from unittest.mock import patch

import pytest

from aptoplay import (
    AptoPlay,
    AptoPlayError,
    ClientConfig,
    ConfigurationError,
    ErrorKind,
    StatisticUpdate,
    StatisticVersion,
)
from aptoplay.client.aptos import COIN_STORE_RESOURCE
from aptoplay.logging import get_log_context
from aptoplay.transport import TransportError, TransportTimeoutError


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def client():
    """Create a client for a test title."""
    return AptoPlay("A1B2C", "secret-key")


@pytest.fixture
def login_envelope():
    """PlayFab LoginWithEmailAddress response."""
    return {
        "code": 200,
        "status": "OK",
        "data": {
            "SessionTicket": "ticket-123",
            "PlayFabId": "ABCDEF123",
            "NewlyCreated": False,
            "SettingsForUser": {"NeedsAttribution": False},
            "EntityToken": {"EntityToken": "tok", "TokenExpiration": "2026-10-20T00:00:00Z"},
        },
    }


@pytest.fixture
def playfab_error():
    """PlayFab 400 error as raised by the transport."""
    return TransportError(
        "HTTP 400: Bad Request",
        status_code=400,
        url="https://A1B2C.playfabapi.com/Client/LoginWithEmailAddress",
        response={
            "code": 400,
            "status": "BadRequest",
            "error": "InvalidEmailOrPassword",
            "errorCode": 1142,
            "errorMessage": "Invalid email address or password",
        },
    )


# ============================================================================
# Construction
# ============================================================================


class TestConstruction:
    """Tests for AptoPlay construction and accessors."""

    def test_accessors(self, client):
        """Test title ID, secret key and base URL."""
        assert client.title_id == "A1B2C"
        assert client.secret_key == "secret-key"
        assert client.base_url == "https://A1B2C.playfabapi.com"

    def test_base_url_override(self):
        """Test that config can point at another PlayFab host."""
        client = AptoPlay("A1B2C", "s", config=ClientConfig(playfab_base_url="http://localhost:8080/"))

        assert client.base_url == "http://localhost:8080"

    def test_empty_credentials_rejected(self):
        """Test that empty title ID and secret key are both reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            AptoPlay(" ", "")

        assert len(exc_info.value.errors) == 2

    def test_subclients_share_session(self, client):
        """Test that Google and Aptos clients reuse the facade's session."""
        assert client.google._session is client._session
        assert client.aptos._session is client._session

    def test_from_env(self, monkeypatch, tmp_path):
        """Test building a client from environment variables."""
        monkeypatch.setenv("APTOPLAY_TITLE_ID", "ENV01")
        monkeypatch.setenv("APTOPLAY_SECRET_KEY", "env-secret")
        monkeypatch.setenv("APTOPLAY_HTTP_TIMEOUT", "15")

        client = AptoPlay.from_env(str(tmp_path / "missing.env"))

        assert client.title_id == "ENV01"
        assert client.timeout == 15

    def test_from_env_reads_dotenv_in_working_directory(self, monkeypatch, tmp_path):
        """Test that from_env() finds the application's .env from the current directory."""
        for name in ("APTOPLAY_TITLE_ID", "APTOPLAY_SECRET_KEY", "APTOPLAY_HTTP_TIMEOUT"):
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
        app_dir = tmp_path / "app"
        app_dir.mkdir()
        (app_dir / ".env").write_text("APTOPLAY_TITLE_ID=CWD01\nAPTOPLAY_SECRET_KEY=cwd-secret\n")
        monkeypatch.chdir(app_dir)

        client = AptoPlay.from_env()

        assert client.title_id == "CWD01"
        assert client.secret_key == "cwd-secret"


# ============================================================================
# PlayFab calls
# ============================================================================


class TestPlayFabCalls:
    """Tests for the PlayFab-backed methods."""

    def test_login_normalizes_keys(self, client, login_envelope):
        """Test that login unwraps data and camelCases keys at every depth."""
        with patch.object(client, "_make_request", return_value=login_envelope) as mock_request:
            result = client.login("player@example.com", "hunter22")

        assert result == {
            "sessionTicket": "ticket-123",
            "playFabId": "ABCDEF123",
            "newlyCreated": False,
            "settingsForUser": {"needsAttribution": False},
            "entityToken": {"entityToken": "tok", "tokenExpiration": "2026-10-20T00:00:00Z"},
        }
        mock_request.assert_called_once_with(
            "https://A1B2C.playfabapi.com/Client/LoginWithEmailAddress",
            method="POST",
            headers=None,
            json_data={"TitleId": "A1B2C", "Email": "player@example.com", "Password": "hunter22"},
        )

    def test_login_does_not_mutate_response(self, client, login_envelope):
        """Test that the transport's response is left untouched."""
        with patch.object(client, "_make_request", return_value=login_envelope):
            client.login("player@example.com", "hunter22")

        assert "SessionTicket" in login_envelope["data"]

    def test_login_failure_is_normalized(self, client, playfab_error):
        """Test that transport failures become AptoPlayError with copied fields."""
        with patch.object(client, "_make_request", side_effect=playfab_error):
            with pytest.raises(AptoPlayError) as exc_info:
                client.login("player@example.com", "wrong")

        error = exc_info.value
        assert error.kind == "PLAYFAB_LOGIN_WITH_EMAIL_ERROR"
        assert error.code == 400
        assert error.response["errorCode"] == 1142
        assert error.cause is playfab_error
        assert error.__cause__ is playfab_error

    def test_timeout_is_normalized(self, client):
        """Test that timeouts are surfaced as AptoPlayError."""
        timeout = TransportTimeoutError("timed out", url="https://A1B2C.playfabapi.com/x")

        with patch.object(client, "_make_request", side_effect=timeout):
            with pytest.raises(AptoPlayError) as exc_info:
                client.login("player@example.com", "pw")

        assert exc_info.value.code == 0

    @pytest.mark.parametrize("email,password", [("", "pw"), ("a@b.co", ""), ("  ", "pw")])
    def test_login_requires_credentials(self, client, email, password):
        """Test that missing credentials fail before any request."""
        with patch.object(client, "_make_request") as mock_request:
            with pytest.raises(AptoPlayError) as exc_info:
                client.login(email, password)

        assert exc_info.value.kind == ErrorKind.LOGIN_WITH_EMAIL.value
        assert isinstance(exc_info.value.cause, ValueError)
        mock_request.assert_not_called()

    def test_unexpected_envelope(self, client):
        """Test that a body without a data object is reported."""
        with patch.object(client, "_make_request", return_value={"code": 200, "status": "OK"}):
            with pytest.raises(AptoPlayError) as exc_info:
                client.login("player@example.com", "pw")

        assert exc_info.value.kind == "PLAYFAB_LOGIN_WITH_EMAIL_ERROR"
        assert not exc_info.value.is_transport_error

    def test_register_user(self, client):
        """Test registration with an explicit username."""
        envelope = {"code": 200, "data": {"PlayFabId": "P1", "Username": "hero"}}

        with patch.object(client, "_make_request", return_value=envelope) as mock_request:
            result = client.register_user("player@example.com", "hunter22", "hero")

        assert result == {"playFabId": "P1", "username": "hero"}
        assert mock_request.call_args.args[0].endswith("/Client/RegisterPlayFabUser")
        assert mock_request.call_args.kwargs["json_data"]["Username"] == "hero"

    def test_register_user_default_username(self, client):
        """Test that the username defaults to the epoch time in milliseconds."""
        envelope = {"code": 200, "data": {"PlayFabId": "P1"}}

        with patch("aptoplay.client.playfab.time.time", return_value=1760000000.5):
            with patch.object(client, "_make_request", return_value=envelope) as mock_request:
                client.register_user("player@example.com", "hunter22")

        assert mock_request.call_args.kwargs["json_data"]["Username"] == "1760000000500"

    def test_register_user_failure_kind(self, client, playfab_error):
        """Test the registration error label."""
        with patch.object(client, "_make_request", side_effect=playfab_error):
            with pytest.raises(AptoPlayError) as exc_info:
                client.register_user("player@example.com", "hunter22")

        assert exc_info.value.kind == "PLAYFAB_REGISTER_WITH_EMAIL_ERROR"

    def test_validate_session_ticket_uses_secret_key(self, client):
        """Test that server API calls send X-SecretKey."""
        envelope = {"code": 200, "data": {"UserInfo": {"PlayFabId": "P1"}, "IsSessionTicketExpired": False}}

        with patch.object(client, "_make_request", return_value=envelope) as mock_request:
            result = client.validate_session_ticket("ticket-123")

        assert result == {"userInfo": {"playFabId": "P1"}, "isSessionTicketExpired": False}
        kwargs = mock_request.call_args.kwargs
        assert kwargs["headers"] == {"X-SecretKey": "secret-key"}
        assert kwargs["json_data"] == {"SessionTicket": "ticket-123"}

    def test_get_user_statistics(self, client):
        """Test statistics retrieval with a name filter."""
        envelope = {
            "code": 200,
            "data": {
                "PlayFabId": "P1",
                "Statistics": [{"StatisticName": "Kills", "Value": 10, "Version": 0}],
            },
        }

        with patch.object(client, "_make_request", return_value=envelope) as mock_request:
            result = client.get_user_statistics("P1", ("Kills",))

        assert result["statistics"] == [{"statisticName": "Kills", "value": 10, "version": 0}]
        assert mock_request.call_args.kwargs["json_data"] == {"PlayFabId": "P1", "StatisticNames": ["Kills"]}

    def test_get_user_statistics_without_filter(self, client):
        """Test that no StatisticNames are sent by default."""
        with patch.object(client, "_make_request", return_value={"data": {"Statistics": []}}) as mock_request:
            assert client.get_user_statistics("P1") == {"statistics": []}

        assert mock_request.call_args.kwargs["json_data"] == {"PlayFabId": "P1"}

    def test_get_user_statistics_single_name_string(self, client):
        """Test that a bare string is sent as one statistic name."""
        with patch.object(client, "_make_request", return_value={"data": {"Statistics": []}}) as mock_request:
            client.get_user_statistics("P1", "Kills")

        assert mock_request.call_args.kwargs["json_data"] == {"PlayFabId": "P1", "StatisticNames": ["Kills"]}

    def test_get_user_statistics_from_generator(self, client):
        """Test that a one-shot iterable of names is sent in full."""
        with patch.object(client, "_make_request", return_value={"data": {"Statistics": []}}) as mock_request:
            client.get_user_statistics("P1", (name for name in ["Kills", "Deaths"]))

        assert mock_request.call_args.kwargs["json_data"]["StatisticNames"] == ["Kills", "Deaths"]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"statistic_names": 5},
            {"statistic_names": ["Kills", 3]},
            {"statistic_versions": [{"StatisticName": "Kills", "Version": 1}]},
            {"statistic_versions": "Kills"},
        ],
    )
    def test_get_user_statistics_rejects_malformed_filters(self, client, kwargs):
        """Test that malformed filters fail as AptoPlayError before any request."""
        with patch.object(client, "_make_request") as mock_request:
            with pytest.raises(AptoPlayError) as exc_info:
                client.get_user_statistics("P1", **kwargs)

        assert exc_info.value.kind == "PLAYFAB_GET_STATISTICS_ERROR"
        assert isinstance(exc_info.value.cause, TypeError)
        mock_request.assert_not_called()

    def test_get_user_statistics_with_versions(self, client):
        """Test that pinned versions are sent as StatisticNameVersions."""
        versions = [StatisticVersion(statistic_name="Kills", version=2)]

        with patch.object(client, "_make_request", return_value={"data": {"Statistics": []}}) as mock_request:
            client.get_user_statistics("P1", statistic_versions=versions)

        assert mock_request.call_args.kwargs["json_data"] == {
            "PlayFabId": "P1",
            "StatisticNameVersions": [{"StatisticName": "Kills", "Version": 2}],
        }

    def test_get_statistic_versions(self, client):
        """Test statistic version lookup."""
        envelope = {"data": {"StatisticVersions": [{"StatisticName": "Kills", "Version": 2}]}}

        with patch.object(client, "_make_request", return_value=envelope) as mock_request:
            result = client.get_statistic_versions("Kills")

        assert result == {"statisticVersions": [{"statisticName": "Kills", "version": 2}]}
        assert mock_request.call_args.args[0].endswith("/Server/GetPlayerStatisticVersions")

    def test_update_user_statistics(self, client):
        """Test that statistic updates are sent with PascalCase fields."""
        updates = [
            StatisticUpdate(statistic_name="Kills", value=11),
            StatisticUpdate(statistic_name="Deaths", value=3, version=1),
        ]

        with patch.object(client, "_make_request", return_value={"data": {}}) as mock_request:
            assert client.update_user_statistics("P1", updates) == {}

        assert mock_request.call_args.kwargs["json_data"] == {
            "PlayFabId": "P1",
            "Statistics": [
                {"StatisticName": "Kills", "Value": 11},
                {"StatisticName": "Deaths", "Value": 3, "Version": 1},
            ],
        }

    def test_update_user_statistics_rejects_plain_dicts(self, client):
        """Test that non-model statistics are normalized instead of raising AttributeError."""
        with patch.object(client, "_make_request") as mock_request:
            with pytest.raises(AptoPlayError) as exc_info:
                client.update_user_statistics("P1", [{"StatisticName": "Kills", "Value": 1}])

        assert exc_info.value.kind == "PLAYFAB_UPDATE_STATISTICS_ERROR"
        assert isinstance(exc_info.value.cause, TypeError)
        mock_request.assert_not_called()

    def test_non_string_credentials(self, client):
        """Test that non-string arguments are rejected as missing."""
        with pytest.raises(AptoPlayError) as exc_info:
            client.login(12345, "pw")

        assert exc_info.value.kind == "PLAYFAB_LOGIN_WITH_EMAIL_ERROR"

    def test_update_user_statistics_requires_statistics(self, client):
        """Test that an empty update list is rejected."""
        with pytest.raises(AptoPlayError) as exc_info:
            client.update_user_statistics("P1", [])

        assert exc_info.value.kind == "PLAYFAB_UPDATE_STATISTICS_ERROR"


# ============================================================================
# Google social login
# ============================================================================


class TestGoogleLogin:
    """Tests for register_with_google_account()."""

    def test_success_adds_email(self, client):
        """Test that the Google email is merged into the PlayFab result."""
        envelope = {"code": 200, "data": {"PlayFabId": "P1", "NewlyCreated": True}}

        with patch.object(client.google, "_make_request", return_value={"email": "g@example.com"}) as google_request:
            with patch.object(client, "_make_request", return_value=envelope) as playfab_request:
                result = client.register_with_google_account("google-token")

        assert result == {"playFabId": "P1", "newlyCreated": True, "email": "g@example.com"}
        assert google_request.call_args.kwargs["headers"] == {"Authorization": "Bearer google-token"}
        assert playfab_request.call_args.kwargs["json_data"] == {
            "TitleId": "A1B2C",
            "CreateAccount": True,
            "AccessToken": "google-token",
        }

    def test_google_profile_failure(self, client):
        """Test that a rejected token fails with the Google label and skips PlayFab."""
        error = TransportError("HTTP 401: Unauthorized", status_code=401, url="https://google", response={"error": "invalid_token"})

        with patch.object(client.google, "_make_request", side_effect=error):
            with patch.object(client, "_make_request") as playfab_request:
                with pytest.raises(AptoPlayError) as exc_info:
                    client.register_with_google_account("bad-token")

        assert exc_info.value.kind == "GOOGLE_PROFILE_ERROR"
        assert exc_info.value.code == 401
        playfab_request.assert_not_called()

    def test_google_profile_without_email(self, client):
        """Test that a profile without email is rejected."""
        with patch.object(client.google, "_make_request", return_value={"sub": "123"}):
            with pytest.raises(AptoPlayError) as exc_info:
                client.register_with_google_account("token")

        assert exc_info.value.kind == "GOOGLE_PROFILE_ERROR"

    def test_empty_token(self, client):
        """Test that an empty access token is rejected."""
        with pytest.raises(AptoPlayError) as exc_info:
            client.register_with_google_account("")

        assert exc_info.value.kind == "GOOGLE_PROFILE_ERROR"

    def test_profile_lookup_is_tagged_with_operation(self, client):
        """Test that the Google lookup runs inside the social register call context."""
        seen = {}

        def fake_request(*args, **kwargs):
            seen.update(get_log_context())
            return {"email": "g@example.com"}

        with patch.object(client.google, "_make_request", side_effect=fake_request):
            with patch.object(client, "_make_request", return_value={"data": {}}):
                client.register_with_google_account("google-token")

        assert seen == {"operation": "PLAYFAB_GOOGLE_SOCIAL_REGISTER_ERROR", "title_id": "A1B2C"}

    def test_non_string_token(self, client):
        """Test that a non-string token is normalized."""
        with pytest.raises(AptoPlayError) as exc_info:
            client.register_with_google_account(None)

        assert exc_info.value.kind == "GOOGLE_PROFILE_ERROR"

    def test_playfab_failure(self, client, playfab_error):
        """Test that PlayFab failures use the social register label."""
        with patch.object(client.google, "_make_request", return_value={"email": "g@example.com"}):
            with patch.object(client, "_make_request", side_effect=playfab_error):
                with pytest.raises(AptoPlayError) as exc_info:
                    client.register_with_google_account("google-token")

        assert exc_info.value.kind == "PLAYFAB_GOOGLE_SOCIAL_REGISTER_ERROR"


# ============================================================================
# Aptos
# ============================================================================


class TestAptos:
    """Tests for minting and balance lookup."""

    def test_mint_token(self, client):
        """Test that minting calls the faucet and returns transaction hashes."""
        with patch.object(client.aptos, "_make_request", return_value=["0xabc"]) as mock_request:
            result = client.mint_token("ABC123", 100_000)

        assert result == ["0xabc"]
        mock_request.assert_called_once_with(
            "https://faucet.devnet.aptoslabs.com/mint",
            method="POST",
            params={"address": "0xabc123", "amount": 100_000},
        )

    def test_mint_token_single_hash(self, client):
        """Test that a single hash string is wrapped in a list."""
        with patch.object(client.aptos, "_make_request", return_value="0xabc"):
            assert client.mint_token("0x1", 1) == ["0xabc"]

    @pytest.mark.parametrize("amount", [0, -5, 1.5, True])
    def test_mint_token_invalid_amount(self, client, amount):
        """Test that non-positive or non-integer amounts are rejected."""
        with patch.object(client.aptos, "_make_request") as mock_request:
            with pytest.raises(AptoPlayError) as exc_info:
                client.mint_token("0x1", amount)

        assert exc_info.value.kind == "APTOS_MINT_ERROR"
        mock_request.assert_not_called()

    @pytest.mark.parametrize("address", ["", "0xnothex", 0x1, None])
    def test_mint_token_invalid_address(self, client, address):
        """Test that empty or non-hex addresses are rejected."""
        with pytest.raises(AptoPlayError) as exc_info:
            client.mint_token(address, 10)

        assert exc_info.value.kind == "APTOS_MINT_ERROR"

    def test_mint_token_faucet_failure(self, client):
        """Test that faucet failures are normalized."""
        error = TransportError("HTTP 500: Internal Server Error", status_code=500, url="https://faucet")

        with patch.object(client.aptos, "_make_request", side_effect=error):
            with pytest.raises(AptoPlayError) as exc_info:
                client.mint_token("0x1", 10)

        assert exc_info.value.kind == "APTOS_MINT_ERROR"
        assert exc_info.value.code == 500

    def test_get_account_balance(self, client):
        """Test balance lookup from the coin store resource."""
        resource = {"type": COIN_STORE_RESOURCE, "data": {"coin": {"value": "100000000"}}}

        with patch.object(client.aptos, "_make_request", return_value=resource) as mock_request:
            assert client.get_account_balance("0x1") == 100_000_000

        assert mock_request.call_args.args[0] == (
            f"https://fullnode.devnet.aptoslabs.com/v1/accounts/0x1/resource/{COIN_STORE_RESOURCE}"
        )

    def test_get_account_balance_malformed(self, client):
        """Test that an unexpected resource shape is normalized."""
        with patch.object(client.aptos, "_make_request", return_value={"data": {}}):
            with pytest.raises(AptoPlayError) as exc_info:
                client.get_account_balance("0x1")

        assert exc_info.value.kind == "APTOS_GET_BALANCE_ERROR"
        assert isinstance(exc_info.value.cause, KeyError)
