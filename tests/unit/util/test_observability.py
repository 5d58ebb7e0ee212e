"""Unit tests for request trace attributes."""

from types import SimpleNamespace

from fpv.util.observability import _request_attributes


def _request(path: str = "/blogs", method: str = "POST"):
    return SimpleNamespace(url=SimpleNamespace(path=path), method=method)


class TestRequestAttributes:
    """Tests for the FastAPI request attributes mapper."""

    def test_authorization_is_dropped_from_values(self):
        """The bearer token parameter never reaches the span."""
        # Arrange
        attributes = {
            "values": {"authorization": "Bearer secret", "post_id": "abc"},
            "errors": [],
        }

        # Act
        mapped = _request_attributes(_request(), attributes)

        # Assert
        assert mapped["values"] == {"post_id": "abc"}
        assert mapped["errors"] == []
        assert attributes["values"]["authorization"] == "Bearer secret"

    def test_path_and_method_are_added(self):
        """Route shape is attached to every request span."""
        # Act
        mapped = _request_attributes(_request("/stats", "GET"), {})

        # Assert
        assert mapped == {"path": "/stats", "method": "GET"}
