"""Unit tests for bearer token extraction."""

import pytest

from fpv.interface.api.security import bearer_token
from fpv.interface.error import AuthenticationRequiredError


class TestBearerToken:
    """Tests for bearer_token()."""

    def test_extracts_token(self):
        assert bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert bearer_token("bearer abc") == "abc"

    @pytest.mark.parametrize(
        "header", [None, "", "Bearer", "Bearer    ", "Basic dXNlcjpwYXNz", "abc"]
    )
    def test_missing_or_foreign_credentials(self, header):
        with pytest.raises(AuthenticationRequiredError):
            bearer_token(header)
