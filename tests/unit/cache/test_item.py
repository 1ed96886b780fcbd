"""
StashIt — Item Model Tests

Tests create_item() and its validation messages.
"""

from datetime import UTC, datetime
from typing import Any

import pytest

from stashit.cache.item import Item, create_item
from stashit.errors import ValidationError
from tests.helpers import NON_OBJECT_VALUES


class TestCreateItem:
    """Test suite for create_item."""

    def test_defaults(self) -> None:
        """Extra defaults to an empty mapping and ttl to None."""
        item = create_item("key", "value")

        assert isinstance(item, Item)
        assert item.model_dump() == {"key": "key", "value": "value", "extra": {}, "ttl": None}

    def test_keeps_extra_and_ttl(self) -> None:
        item = create_item("key", [1, 2], {"source": "db"}, 60)

        assert item.value == [1, 2]
        assert item.extra == {"source": "db"}
        assert item.ttl == 60

    def test_accepts_datetime_ttl(self) -> None:
        expires = datetime(2030, 1, 1, tzinfo=UTC)

        item = create_item("key", "value", ttl=expires)

        assert item.ttl == expires

    @pytest.mark.parametrize("extra", NON_OBJECT_VALUES)
    def test_rejects_non_mapping_extra(self, extra: Any) -> None:
        with pytest.raises(ValidationError, match=r"^'extra' must be an object\.$"):
            create_item("key", "value", extra)

    @pytest.mark.parametrize("ttl", ["60", [60], {"ttl": 60}, True])
    def test_rejects_non_number_ttl(self, ttl: Any) -> None:
        with pytest.raises(ValidationError) as exc_info:
            create_item("key", "value", ttl=ttl)

        assert str(exc_info.value) == "'ttl' needs to be a number."

    def test_rejects_fractional_ttl(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            create_item("key", "value", ttl=1.5)

        assert str(exc_info.value) == "'ttl' needs to be an intiger."

    def test_accepts_whole_float_ttl(self) -> None:
        assert create_item("key", "value", ttl=2.0).ttl == 2.0

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_rejects_non_positive_ttl(self, ttl: int) -> None:
        with pytest.raises(ValidationError) as exc_info:
            create_item("key", "value", ttl=ttl)

        assert str(exc_info.value) == f"'ttl' needs to be greater than 0 (value passed: {ttl})."

    def test_rejects_non_string_key(self) -> None:
        with pytest.raises(ValidationError, match="'key' must be a string."):
            create_item(1, "value")  # type: ignore[arg-type]

    def test_rejects_empty_key(self) -> None:
        with pytest.raises(ValidationError, match="'key' can't be empty."):
            create_item("", "value")
