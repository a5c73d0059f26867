"""RSC service account configuration.

A service account is read from the JSON file downloaded from RSC when the
service account is created, from the environment, or from both with the
environment taking precedence:

    RUBRIK_POLARIS_SERVICEACCOUNT_FILE           path of the service account file
    RUBRIK_POLARIS_SERVICEACCOUNT_CREDENTIALS    content of a service account file
    RUBRIK_POLARIS_SERVICEACCOUNT_NAME
    RUBRIK_POLARIS_SERVICEACCOUNT_CLIENTID
    RUBRIK_POLARIS_SERVICEACCOUNT_CLIENTSECRET
    RUBRIK_POLARIS_SERVICEACCOUNT_ACCESSTOKENURI
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from polaris_sdk.errors import PolarisError, create_error
from polaris_sdk.log import get_logger
from polaris_sdk.secret import Option, String, redact

from .models import DEFAULT_SERVICE_ACCOUNT_FILE

ENV_PREFIX = "RUBRIK_POLARIS_SERVICEACCOUNT"

logger = get_logger("config")


@dataclass
class ServiceAccount:
    """RSC service account.

    The name is the name of the service account, not of the RSC account.
    The account name, FQDN, API URL and token URL are derived from the
    access token URI when the account is validated.
    """

    client_id: str = ""
    client_secret: String = String("")
    name: str = ""
    access_token_uri: str = ""

    _account_name: str = field(default="", repr=False)
    _account_fqdn: str = field(default="", repr=False)
    _api_url: str = field(default="", repr=False)
    _token_url: str = field(default="", repr=False)
    _env_override: bool = field(default=False, repr=False)

    @property
    def account_name(self) -> str:
        """RSC account name, e.g. "my-account" for my-account.my.rubrik.com."""
        return self._account_name

    @property
    def account_fqdn(self) -> str:
        """Fully qualified domain name of the RSC account."""
        return self._account_fqdn

    @property
    def api_url(self) -> str:
        """RSC account API URL."""
        return self._api_url

    @property
    def token_url(self) -> str:
        """RSC account token URL."""
        return self._token_url

    @property
    def allow_env_override(self) -> bool:
        return self._env_override

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceAccount":
        """Create from the service account file layout."""
        return cls(
            client_id=str(data.get("client_id") or ""),
            client_secret=String(data.get("client_secret") or ""),
            name=str(data.get("name") or ""),
            access_token_uri=str(data.get("access_token_uri") or ""),
        )

    def redacted(self, *options: Option) -> "ServiceAccount":
        """Return a copy safe to log, with the client secret redacted."""
        return redact(self, *options)

    def validate(self) -> None:
        """Validate the account and derive the account name and URLs.

        Raises:
            PolarisError: ACCOUNT_INVALID naming the first invalid field
        """
        if not self.name:
            raise create_error("ACCOUNT_INVALID", field="name")
        if not self.client_id:
            raise create_error("ACCOUNT_INVALID", field="client id")
        if not self.client_secret:
            raise create_error("ACCOUNT_INVALID", field="client secret")

        uri = urlsplit(self.access_token_uri)
        if not uri.scheme or not uri.hostname:
            raise create_error(
                "ACCOUNT_INVALID",
                field="access token uri",
                detail=f"not an absolute URI: {self.access_token_uri!r}",
            )

        fqdn = uri.hostname
        i = fqdn.find(".")
        if i == -1:
            raise create_error(
                "ACCOUNT_INVALID",
                field="access token uri",
                detail="no account name found",
            )

        self._account_name = fqdn[:i]
        self._account_fqdn = fqdn
        self._api_url = f"https://{fqdn}/api"
        self._token_url = self.access_token_uri


def _service_account_from_env() -> ServiceAccount:
    found = False
    data: dict[str, Any] = {}

    if (creds := os.environ.get(f"{ENV_PREFIX}_CREDENTIALS")) is not None:
        try:
            data = json.loads(creds)
        except json.JSONDecodeError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"failed to unmarshal {ENV_PREFIX}_CREDENTIALS: {e}",
            ) from e
        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail=f"{ENV_PREFIX}_CREDENTIALS must hold a JSON object",
            )
        found = True

    for key, env in (
        ("name", "NAME"),
        ("client_id", "CLIENTID"),
        ("client_secret", "CLIENTSECRET"),
        ("access_token_uri", "ACCESSTOKENURI"),
    ):
        if (value := os.environ.get(f"{ENV_PREFIX}_{env}")) is not None:
            data[key] = value
            found = True

    if not found:
        raise create_error("CONFIG_NOT_FOUND", source="service account environment")

    return ServiceAccount.from_dict(data)


def _service_account_from_file(file: str | Path) -> ServiceAccount:
    path = Path(file).expanduser()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise create_error(
            "CONFIG_INVALID", detail=f"failed to read service account file: {e}"
        ) from e
    except json.JSONDecodeError as e:
        raise create_error(
            "CONFIG_INVALID", detail=f"failed to unmarshal service account: {e}"
        ) from e

    if not isinstance(data, dict):
        raise create_error(
            "CONFIG_INVALID", detail="failed to unmarshal service account: not a JSON object"
        )

    return ServiceAccount.from_dict(data)


def service_account_from_env() -> ServiceAccount:
    """Read a service account from the environment.

    The account can be stored as a single environment variable,
    RUBRIK_POLARIS_SERVICEACCOUNT_CREDENTIALS, holding the content of the
    service account file, or as one variable per field. Per-field variables
    override the content of the single variable.

    Raises:
        PolarisError: CONFIG_NOT_FOUND if no variable is set, CONFIG_INVALID
            or ACCOUNT_INVALID if the account is malformed
    """
    account = _service_account_from_env()
    account.validate()
    return account


def service_account_from_file(
    file: str | Path, allow_env_override: bool = False
) -> ServiceAccount:
    """Read a service account from a service account file.

    If allow_env_override is true, RUBRIK_POLARIS_SERVICEACCOUNT_FILE
    replaces file and non-empty environment fields override the fields read
    from the file. Errors reading the file are only reported when the
    merged account is invalid, since the environment may supply everything.

    Raises:
        PolarisError: If the resulting account is invalid
    """
    env_account: ServiceAccount | None = None
    if allow_env_override:
        try:
            env_account = _service_account_from_env()
        except PolarisError as e:
            if e.code != "CONFIG_NOT_FOUND":
                raise
        file = os.environ.get(f"{ENV_PREFIX}_FILE", file)

    file_error: PolarisError | None = None
    try:
        account = _service_account_from_file(file)
    except PolarisError as e:
        file_error = e
        account = ServiceAccount()
    account._env_override = allow_env_override

    if env_account is not None:
        if env_account.name:
            account.name = env_account.name
        if env_account.client_id:
            account.client_id = env_account.client_id
        if env_account.client_secret:
            account.client_secret = env_account.client_secret
        if env_account.access_token_uri:
            account.access_token_uri = env_account.access_token_uri

    try:
        account.validate()
    except PolarisError as e:
        if file_error is not None:
            e.detail = f"{e.detail or e.message} (service account file error: {file_error.detail})"
            e.cause = file_error
        raise

    logger.debug("Service account loaded", account=str(redact(account)))
    return account


def default_service_account(allow_env_override: bool = False) -> ServiceAccount:
    """Read the service account from the default service account file."""
    return service_account_from_file(DEFAULT_SERVICE_ACCOUNT_FILE, allow_env_override)
