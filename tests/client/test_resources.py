"""Tests for transaction resource paths."""

from __future__ import annotations

import pytest

from grabbit.client.resources import transaction_id_from_path


class TestTransactionIdFromPath:
    """Tests for transaction_id_from_path()."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/grabbit/transaction/123", "123"),
            ("/grabbit/transaction/123.json", "123"),
            ("/grabbit/transaction/123.tar.gz", "123"),
            ("/grabbit/transaction/abc-def.html", "abc-def"),
        ],
    )
    def test_transaction_paths(self, path: str, expected: str) -> None:
        """The id is extracted without its extension."""
        assert transaction_id_from_path(path) == expected

    def test_trailing_dot_kept(self) -> None:
        """A dot without extension characters is part of the id."""
        assert transaction_id_from_path("/grabbit/transaction/123.") == "123."

    def test_dot_then_extension_after_trailing_dot(self) -> None:
        """Only a dot followed by characters starts the extension."""
        assert transaction_id_from_path("/grabbit/transaction/123..json") == "123"

    @pytest.mark.parametrize(
        "path",
        [
            "",
            "/grabbit/transaction/",
            "/grabbit/job/123",
            "/content/grabbit/transaction/123",
        ],
    )
    def test_other_paths(self, path: str) -> None:
        """Paths that are not transaction resources give an empty id."""
        assert transaction_id_from_path(path) == ""
