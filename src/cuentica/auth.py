"""Authentication for the Cuéntica API."""

from __future__ import annotations

import os
from collections.abc import Mapping

from cuentica.client_base import ClientConfig, api_log, error_log
from cuentica.exceptions import CuenticaConfigError


class TokenAuth:
    """Authentication using a Cuéntica API token.

    The token is resolved once, when the auth object is built, and never
    re-read afterwards.
    """

    HEADER_NAME = "X-AUTH-TOKEN"

    def __init__(self, api_token: str) -> None:
        """Initialize token authentication.

        Args:
            api_token: API token from Cuéntica

        Raises:
            CuenticaConfigError: If the token is empty
        """
        if not api_token:
            error_log.error("No token provided")
            raise CuenticaConfigError(
                "API token is required. Either pass it to the constructor "
                f"or set {ClientConfig.TOKEN_ENV_VAR} environment variable"
            )
        self._api_token = api_token

    @classmethod
    def resolve(
        cls,
        api_token: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> TokenAuth:
        """Build auth from an explicit token, falling back to the environment.

        Args:
            api_token: Explicit API token; takes precedence when not None
            environ: Mapping to read CUENTICA_TOKEN from (default: os.environ)

        Returns:
            Token authentication

        Raises:
            CuenticaConfigError: If neither source provides a token
        """
        if api_token is None:
            if environ is None:
                environ = os.environ
            api_token = environ.get(ClientConfig.TOKEN_ENV_VAR)
            if api_token:
                api_log.debug("Using token from %s", ClientConfig.TOKEN_ENV_VAR)
        return cls(api_token or "")

    @property
    def api_token(self) -> str:
        """The API token."""
        return self._api_token

    def get_headers(self) -> dict[str, str]:
        """Get authentication headers."""
        return {self.HEADER_NAME: self._api_token}
