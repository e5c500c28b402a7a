"""Unit tests for application exceptions."""

from sync_admin.core.exceptions import (
    ApiStatusError,
    ApplicationError,
    ConfigurationError,
    CredentialStoreError,
    InvalidResponseError,
)


class TestApiStatusError:
    """Tests for the HTTP status error."""

    def test_carries_status_and_body(self):
        error = ApiStatusError(404, "Not Found", '{"error":"no such installation"}')
        assert error.status_code == 404
        assert error.body == '{"error":"no such installation"}'
        assert error.status_line == "404 Not Found"
        assert error.code == "API_STATUS_ERROR"
        assert "404" in str(error)

    def test_status_line_without_reason(self):
        assert ApiStatusError(599).status_line == "599"


class TestErrorCodes:
    """All errors share the ApplicationError base and expose a code."""

    def test_codes(self):
        assert ConfigurationError().code == "CFG_INVALID"
        assert CredentialStoreError().code == "CFG_CREDENTIALS"
        assert InvalidResponseError().code == "API_INVALID_RESPONSE"

    def test_hierarchy(self):
        for error in (ConfigurationError(), CredentialStoreError(), InvalidResponseError(), ApiStatusError(500)):
            assert isinstance(error, ApplicationError)
