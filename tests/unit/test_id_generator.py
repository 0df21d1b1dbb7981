"""Tests for br_common.id_generator and br_common.datetime_utils."""

from datetime import UTC, datetime

import pytest

from src.br_common.datetime_utils import clock_label, from_storage, to_storage, utc_now
from src.br_common.id_generator import SequentialIdGenerator


class TestSequentialIdGenerator:
    def test_starts_at_one(self) -> None:
        gen = SequentialIdGenerator()
        assert gen.next_id() == 1
        assert gen.next_id() == 2

    def test_custom_start(self) -> None:
        gen = SequentialIdGenerator(start=100)
        assert gen.next_id() == 100

    def test_invalid_start_raises(self) -> None:
        with pytest.raises(ValueError):
            SequentialIdGenerator(start=0)

    def test_unique_ids(self) -> None:
        gen = SequentialIdGenerator()
        ids = {gen.next_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_monotonically_increasing(self) -> None:
        gen = SequentialIdGenerator()
        prev = gen.next_id()
        for _ in range(100):
            current = gen.next_id()
            assert current > prev
            prev = current

    def test_peek_does_not_consume(self) -> None:
        gen = SequentialIdGenerator()
        assert gen.peek() == 1
        assert gen.next_id() == 1

    def test_generators_are_independent(self) -> None:
        a, b = SequentialIdGenerator(), SequentialIdGenerator()
        a.next_id()
        a.next_id()
        assert b.next_id() == 1


class TestDatetimeUtils:
    def test_utc_now_is_aware(self) -> None:
        now = utc_now()
        assert isinstance(now, datetime)
        assert now.tzinfo == UTC

    def test_storage_round_trip(self) -> None:
        now = utc_now()
        assert from_storage(to_storage(now)) == now

    def test_storage_is_fixed_width(self) -> None:
        whole = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)
        fractional = datetime(2026, 1, 1, 12, 0, 0, 1, tzinfo=UTC)
        assert len(to_storage(whole)) == len(to_storage(fractional))
        assert to_storage(whole) < to_storage(fractional)

    def test_from_storage_none(self) -> None:
        assert from_storage(None) is None

    def test_clock_label(self) -> None:
        assert clock_label(datetime(2026, 1, 1, 7, 5, tzinfo=UTC)) == "07:05"
