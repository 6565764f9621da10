"""Google OAuth2 profile lookup used by social login."""

from aptoplay.logging import get_logger
from aptoplay.normalization import normalize_error
from aptoplay.transport import BaseClient, TransportError

from .models import ErrorKind

logger = get_logger(__name__, component="google")


class GoogleProfileClient(BaseClient):
    """Reads the signed-in user's profile from Google's userinfo endpoint.

    The access token is forwarded as-is; validating it is Google's job.
    """

    def get_email(self, access_token: str) -> str:
        """Return the email address of the account owning ``access_token``.

        Raises:
            AptoPlayError: kind GOOGLE_PROFILE_ERROR when the token is empty,
                the request fails, or the profile carries no email
        """
        kind = ErrorKind.GOOGLE_PROFILE.value

        if not isinstance(access_token, str) or not access_token.strip():
            raise normalize_error(kind, ValueError("access_token is required"))

        try:
            profile = self._make_request(
                self.config.google_userinfo_url,
                headers={"Authorization": f"Bearer {access_token.strip()}"},
            )
        except TransportError as e:
            logger.warning(
                "Google profile lookup failed",
                extra={"event": "google.profile.failed", "status_code": e.status_code},
            )
            raise normalize_error(kind, e) from e

        email = profile.get("email") if isinstance(profile, dict) else None
        if not email:
            raise normalize_error(kind, ValueError("Google profile does not include an email"))

        return email
