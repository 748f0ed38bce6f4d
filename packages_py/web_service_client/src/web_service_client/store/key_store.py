"""
Credential store for web_service_client.

Named host/credential records kept in a JSON file:

    {
      "jira": {
        "host": "https://jira.example.com/",
        "verify": "https://jira.example.com/rest/api/2/myself",
        "authentication": "Bearer",
        "token": "...",
        "comment": "Access to JIRA"
      }
    }

A ``KeyStore`` is an ordinary object: callers load it, own it and pass the
entries they need into service constructors.
"""
import logging
import os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, TypeAdapter, ValidationError, field_serializer

from ..auth.authenticator import (
    ApiKeyAuthenticator,
    Authenticator,
    BasicAuthenticator,
    BearerAuthenticator,
    MultiAuthenticator,
)
from ..exceptions import KeyStoreError
from ..serialization.converters import LenientDatetime

logger = logging.getLogger("web_service_client.store")

JFROG_API_HEADER = "X-JFrog-Art-Api"


class AuthenticationType(str, Enum):
    """Kind of authentication a credential record uses."""

    NONE = "None"
    BASIC = "Basic"
    BEARER = "Bearer"
    BEARER_AND_JFROG_API = "BearerAndJFrogApi"


class KeyStoreEntry(BaseModel):
    """One named host/credential record."""

    model_config = ConfigDict(populate_by_name=True)

    host: str
    verify: Optional[str] = None
    authentication: AuthenticationType = AuthenticationType.NONE
    token: Optional[SecretStr] = None
    token_expire: LenientDatetime = Field(default=None, alias="tokenexpire")
    user: Optional[str] = None
    email: Optional[str] = None
    login: Optional[str] = None
    password: Optional[SecretStr] = None
    comment: Optional[str] = None
    update: Optional[str] = None

    @field_serializer("token", "password", when_used="json")
    def _reveal_secret(self, value: Optional[SecretStr]) -> Optional[str]:
        return value.get_secret_value() if value is not None else None

    @property
    def url(self) -> str:
        return self.host

    def _secret(self, name: str) -> str:
        value = getattr(self, name)
        if value is None:
            raise KeyStoreError(
                f"'{name}' is required for {self.authentication.value} authentication of {self.host}"
            )
        return value.get_secret_value() if isinstance(value, SecretStr) else value

    def authenticator(self) -> Optional[Authenticator]:
        """Build the authenticator this record describes, or None."""
        if self.authentication is AuthenticationType.NONE:
            return None
        if self.authentication is AuthenticationType.BASIC:
            return BasicAuthenticator(self._secret("login"), self._secret("password"))
        if self.authentication is AuthenticationType.BEARER:
            return BearerAuthenticator(self._secret("token"))
        token = self._secret("token")
        return MultiAuthenticator(
            BearerAuthenticator(token),
            ApiKeyAuthenticator(JFROG_API_HEADER, token),
        )


_ENTRIES_ADAPTER = TypeAdapter(Dict[str, KeyStoreEntry])


def default_path() -> Path:
    """Per-user location of the credential store file."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "KeyStore" / "KeyStore.json"


def demo_entries() -> Dict[str, KeyStoreEntry]:
    """Placeholder records written when no store file exists yet."""
    now = datetime.now()
    return {
        "jira": KeyStoreEntry(
            host="https://www.atlassian.com/",
            verify="https://www.atlassian.com/",
            token=SecretStr("xxxxxxxx"),
            token_expire=now,
            user="Max Mustermann",
            email="Max.Mustermann@web.de",
            login="mm",
            password=SecretStr("1234"),
            comment="Access to Atlassian JIRA",
        ),
        "github": KeyStoreEntry(
            host="https://github.com/",
            verify="https://github.com/",
            token=SecretStr("xxxxxxxx"),
            token_expire=now,
            user="Max Mustermann",
            email="Max.Mustermann@web.de",
            login="mm",
            password=SecretStr("1234"),
            comment="Access to Microsoft Github",
        ),
    }


class KeyStore:
    """Named credential records loaded from a JSON file."""

    def __init__(self, entries: Mapping[str, KeyStoreEntry], path: Optional[Path] = None):
        self._entries: Dict[str, KeyStoreEntry] = dict(entries)
        self._path = path

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @classmethod
    def load(cls, path: Union[str, Path, None] = None) -> "KeyStore":
        """Load the store from ``path``.

        When the file does not exist a demo file with placeholder records is
        created there and returned.
        """
        path = Path(path) if path is not None else default_path()

        if not path.exists():
            logger.info(f"KeyStore.load: {path} not found, creating demo file")
            store = cls(demo_entries(), path)
            store.save()
            return store

        logger.info(f"KeyStore.load: loading {path}")
        try:
            entries = _ENTRIES_ADAPTER.validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            raise KeyStoreError(f"Failed to load key store {path}: {e}") from e
        return cls(entries, path)

    def save(self, path: Union[str, Path, None] = None) -> None:
        """Write the store as JSON to ``path`` (default: where it was loaded from).

        The file holds plaintext secrets and is made readable by the owner only.
        """
        target = Path(path) if path is not None else (self._path or default_path())
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(
            _ENTRIES_ADAPTER.dump_json(self._entries, by_alias=True, exclude_none=True, indent=2)
        )
        target.chmod(0o600)

    def get(self, name: str) -> Optional[KeyStoreEntry]:
        return self._entries.get(name)

    def names(self) -> List[str]:
        return list(self._entries)

    def __getitem__(self, name: str) -> KeyStoreEntry:
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
