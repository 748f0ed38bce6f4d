"""
Error taxonomy for web_service_client.

Two families escape this package:

- ``WebServiceArgumentError``: raised before any network I/O when the caller
  passes a blank request URI or a missing body.
- ``WebServiceError``: raised after (or instead of) network I/O when the
  service is not connected, the transport fails, or the response status is
  not successful.
"""
from typing import Optional


class WebServiceArgumentError(ValueError):
    """Base class for pre-flight argument validation failures."""

    def __init__(self, message: str, param_name: Optional[str] = None):
        self.param_name = param_name
        if param_name:
            message = f"{message} (Parameter '{param_name}')"
        super().__init__(message)


class ArgumentRequestUriError(WebServiceArgumentError):
    """Raised when a request URI argument is None or blank."""

    @classmethod
    def raise_if_blank(cls, argument: Optional[object], param_name: str = "uri") -> None:
        """Raise if ``argument`` is None or renders as whitespace only."""
        if argument is None or not str(argument).strip():
            raise cls("Argument is null or empty", param_name)


class ArgumentNullError(WebServiceArgumentError):
    """Raised when a required body object is None."""

    @classmethod
    def raise_if_none(cls, argument: Optional[object], param_name: str = "body") -> None:
        if argument is None:
            raise cls("Argument is null", param_name)


class WebServiceError(Exception):
    """Service failure carrying the context of the failed call.

    All fields are read-only. ``message`` is diagnostic text, usually the
    response body, and may be None. ``status_code`` is None when no response
    was received. ``label`` names the logical operation that failed.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        request_uri: Optional[str] = None,
        status_code: Optional[int] = None,
        reason_phrase: Optional[str] = None,
        label: Optional[str] = None,
    ):
        self._message = message
        self._request_uri = request_uri
        self._status_code = status_code
        self._reason_phrase = reason_phrase
        self._label = label
        super().__init__(self._format())

    @property
    def message(self) -> Optional[str]:
        return self._message

    @property
    def request_uri(self) -> Optional[str]:
        return self._request_uri

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    @property
    def reason_phrase(self) -> Optional[str]:
        return self._reason_phrase

    @property
    def label(self) -> Optional[str]:
        return self._label

    def _format(self) -> str:
        if self._status_code is not None:
            text = f"{self._status_code} {self._reason_phrase or ''}".strip()
        else:
            text = self._reason_phrase or ""
        if self._request_uri is not None:
            text = f'{text}: "{self._request_uri}"' if text else f'"{self._request_uri}"'
        if self._message:
            text = f"{text} {self._message}" if text else self._message
        if self._label:
            text = f"{text} from {self._label}"
        return text


class WebServiceNotConnectedError(WebServiceError):
    """Raised without network I/O when the transport handle is absent."""

    def __init__(self, label: Optional[str] = None):
        super().__init__("WebService is not connected", label=label)


class WebServiceAuthenticationError(WebServiceError):
    """Raised when authentication at connect time fails."""


class SerializerNotFoundError(LookupError):
    """Raised when no serializer is registered for a declared type."""

    def __init__(self, tp: object):
        self.type = tp
        super().__init__(f"No serializer registered for type {tp!r}")


class KeyStoreError(Exception):
    """Raised when the credential store file cannot be read or parsed."""
