"""Tests for correlation ID generation and context management."""

import re
from concurrent.futures import ThreadPoolExecutor

from core.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


class TestGenerateCorrelationId:
    """Tests for generate_correlation_id function."""

    def test_short_lowercase_hex(self) -> None:
        """IDs are short enough to read out over the phone."""
        assert re.match(r"^[0-9a-f]{8}$", generate_correlation_id())

    def test_generates_unique_ids(self) -> None:
        ids = {generate_correlation_id() for _ in range(500)}
        assert len(ids) == 500


class TestCorrelationIdContext:
    """Tests for the request-scoped context variable."""

    def test_set_get_and_reset(self) -> None:
        before = get_correlation_id()
        token = set_correlation_id("abc12345")

        assert get_correlation_id() == "abc12345"

        reset_correlation_id(token)
        assert get_correlation_id() == before

    def test_nested_reset_restores_outer(self) -> None:
        outer = set_correlation_id("outer001")
        inner = set_correlation_id("inner001")

        reset_correlation_id(inner)
        assert get_correlation_id() == "outer001"
        reset_correlation_id(outer)

    def test_threads_do_not_share_ids(self) -> None:
        def bind_and_read(value: str) -> str:
            set_correlation_id(value)
            return get_correlation_id()

        values = [f"{i:08x}" for i in range(8)]
        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(bind_and_read, values))

        assert results == values
