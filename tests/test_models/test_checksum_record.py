from __future__ import annotations

import pytest

from pipsbom.models import ChecksumRecord


@pytest.mark.unit
class TestChecksumRecord:
    """Tests for ChecksumRecord."""

    def test_defaults(self) -> None:
        record = ChecksumRecord()

        assert record.algorithm == "SHA256"
        assert record.value == ""
        assert record.is_empty

    def test_with_value(self) -> None:
        record = ChecksumRecord("SHA256", "deadbeef")

        assert not record.is_empty
        assert record.to_dict() == {"algorithm": "SHA256", "value": "deadbeef"}
        assert str(record) == "SHA256: deadbeef"

    def test_str_without_value(self) -> None:
        assert str(ChecksumRecord()) == "SHA256: <none>"

    def test_equality(self) -> None:
        assert ChecksumRecord("SHA256", "a") == ChecksumRecord("SHA256", "a")
        assert ChecksumRecord("SHA256", "a") != ChecksumRecord("SHA256", "b")
