"""
Test suite for timestamp helpers.

System role: Verification of recency ordering primitives
"""

from datetime import datetime, timedelta, timezone

from docchat.core.clock import ensure_aware, next_timestamp, utc_now


class TestNextTimestamp:
    """Test suite for next_timestamp()."""

    def test_without_previous_should_return_now(self) -> None:
        """Test no previous value yields the current UTC time."""
        # Arrange
        before = utc_now()

        # Act
        value = next_timestamp()

        # Assert
        assert value >= before
        assert value.tzinfo is not None

    def test_previous_in_future_should_advance_by_one_microsecond(self) -> None:
        """Test a stored value ahead of the clock is still exceeded."""
        # Arrange
        future = utc_now() + timedelta(minutes=5)

        # Act
        value = next_timestamp(future)

        # Assert
        assert value == future + timedelta(microseconds=1)

    def test_naive_previous_should_be_treated_as_utc(self) -> None:
        """Test naive values from SQLite compare as UTC."""
        # Arrange
        naive_future = (utc_now() + timedelta(minutes=5)).replace(tzinfo=None)

        # Act
        value = next_timestamp(naive_future)

        # Assert
        assert value == naive_future.replace(tzinfo=timezone.utc) + timedelta(microseconds=1)

    def test_repeated_calls_should_be_strictly_increasing(self) -> None:
        """Test chaining never produces equal values."""
        # Arrange
        values = [next_timestamp()]

        # Act
        for _ in range(50):
            values.append(next_timestamp(values[-1]))

        # Assert
        assert all(a < b for a, b in zip(values, values[1:]))


class TestEnsureAware:
    """Test suite for ensure_aware()."""

    def test_aware_value_should_be_converted_to_utc(self) -> None:
        """Test non-UTC offsets are normalized."""
        # Arrange
        value = datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

        # Act & Assert
        assert ensure_aware(value) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert ensure_aware(value).utcoffset() == timedelta(0)
