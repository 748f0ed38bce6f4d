"""
Tests for exceptions.py
Logic testing: Decision/Branch
"""
import pytest

from web_service_client.exceptions import (
    ArgumentNullError,
    ArgumentRequestUriError,
    SerializerNotFoundError,
    WebServiceArgumentError,
    WebServiceAuthenticationError,
    WebServiceError,
    WebServiceNotConnectedError,
)


class TestArgumentErrors:
    """Tests for pre-flight argument errors."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_raise_if_blank(self, value):
        with pytest.raises(ArgumentRequestUriError) as exc_info:
            ArgumentRequestUriError.raise_if_blank(value, "uri")
        assert exc_info.value.param_name == "uri"
        assert "uri" in str(exc_info.value)

    def test_raise_if_blank_accepts_value(self):
        ArgumentRequestUriError.raise_if_blank("rest/item")

    def test_raise_if_none(self):
        with pytest.raises(ArgumentNullError):
            ArgumentNullError.raise_if_none(None)
        ArgumentNullError.raise_if_none({})

    # Decision: argument errors are ValueErrors, not service errors
    def test_hierarchy(self):
        assert issubclass(ArgumentNullError, WebServiceArgumentError)
        assert issubclass(WebServiceArgumentError, ValueError)
        assert not issubclass(WebServiceArgumentError, WebServiceError)


class TestWebServiceError:
    """Tests for WebServiceError."""

    def test_fields(self):
        error = WebServiceError("boom", "https://api.example.com/x", 500, "Internal Server Error", "get_x")
        assert error.message == "boom"
        assert error.request_uri == "https://api.example.com/x"
        assert error.status_code == 500
        assert error.reason_phrase == "Internal Server Error"
        assert error.label == "get_x"

    def test_str(self):
        error = WebServiceError("boom", "https://api.example.com/x", 500, "Internal Server Error", "get_x")
        assert str(error) == '500 Internal Server Error: "https://api.example.com/x" boom from get_x'

    # Decision: no response received
    def test_str_without_status(self):
        error = WebServiceError("refused", "https://api.example.com/x", label="GET")
        assert error.status_code is None
        assert str(error) == '"https://api.example.com/x" refused from GET'

    # State: fields are read-only
    def test_read_only(self):
        error = WebServiceError("boom")
        with pytest.raises(AttributeError):
            error.status_code = 200

    def test_not_connected(self):
        error = WebServiceNotConnectedError("get_x")
        assert isinstance(error, WebServiceError)
        assert error.message == "WebService is not connected"
        assert error.label == "get_x"
        assert error.status_code is None

    def test_authentication_error_is_service_error(self):
        assert issubclass(WebServiceAuthenticationError, WebServiceError)


class TestSerializerNotFoundError:
    def test_carries_type(self):
        error = SerializerNotFoundError(int)
        assert error.type is int
        assert isinstance(error, LookupError)
