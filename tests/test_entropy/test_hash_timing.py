"""Tests for the HashTimingSource fallback plugin."""

from __future__ import annotations

from unittest.mock import patch

from rand_provider.config import RandConfig
from rand_provider.entropy.hash_timing import HashTimingSource, _generate_timing_bytes


class TestHashTimingSource:
    """Tests for the SHA-256 timing-jitter source."""

    def test_name(self, default_config: RandConfig) -> None:
        assert HashTimingSource(default_config).name == "hash_timing"

    def test_is_not_strong(self, default_config: RandConfig) -> None:
        source = HashTimingSource(default_config)
        assert source.is_strong is False
        assert source.is_available is True

    def test_returns_correct_byte_count(self) -> None:
        source = HashTimingSource(RandConfig(hash_timing_iterations=1))
        for n in (1, 5, 16):
            assert len(source.get_random_bytes(n)) == n

    def test_bits_come_from_timing_deltas(self) -> None:
        """Each bit is the LSB of one perf_counter_ns delta, LSB first."""
        # Deltas per bit: odd, even, odd, even, ... -> 0b01010101
        ticks = []
        now = 0
        for bit in range(8):
            ticks.append(now)
            now += 3 if bit % 2 == 0 else 4
            ticks.append(now)
        with patch(
            "rand_provider.entropy.hash_timing.time.perf_counter_ns",
            side_effect=ticks,
        ):
            assert _generate_timing_bytes(1, hash_iterations=1) == bytes([0b01010101])

    def test_uses_configured_iterations(self) -> None:
        with patch("rand_provider.entropy.hash_timing._generate_timing_bytes") as gen:
            gen.return_value = b"\x00\x00"
            HashTimingSource(RandConfig(hash_timing_iterations=5)).get_random_bytes(2)
        gen.assert_called_once_with(2, 5)
