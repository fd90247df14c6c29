"""Tests for RandomProvider.get_integer rejection sampling."""

from __future__ import annotations

import sys

import pytest

from rand_provider.config import RandConfig
from rand_provider.entropy.mock import ScriptedEntropySource
from rand_provider.exceptions import (
    DomainError,
    EntropyUnavailableError,
    EnvironmentUnsupportedError,
)
from rand_provider.provider import RandomProvider


class TestGetIntegerArguments:
    """Argument validation and the degenerate range."""

    def test_min_above_max_raises(self, uniform_provider) -> None:
        with pytest.raises(DomainError, match="min must not exceed max"):
            uniform_provider.get_integer(5, 3)

    def test_equal_bounds_consume_no_entropy(self, scripted_provider) -> None:
        provider, source = scripted_provider([])
        assert provider.get_integer(7, 7) == 7
        assert provider.get_integer(-3, -3, strong=True) == -3
        assert source.call_count == 0

    def test_range_too_large(self, uniform_provider) -> None:
        with pytest.raises(DomainError, match="range too large"):
            uniform_provider.get_integer(-1, sys.maxsize)

    def test_largest_allowed_range(self, uniform_provider) -> None:
        value = uniform_provider.get_integer(0, sys.maxsize)
        assert 0 <= value <= sys.maxsize

    def test_non_integer_bounds(self, uniform_provider) -> None:
        with pytest.raises(DomainError, match="integers"):
            uniform_provider.get_integer(0.5, 10)  # type: ignore[arg-type]


class TestRejectionSampling:
    """Exact byte consumption and masking."""

    def test_single_byte_range(self, scripted_provider) -> None:
        # range 9 -> 4 bits, mask 0x0F, 1 byte per draw
        provider, source = scripted_provider([0xF3])
        assert provider.get_integer(10, 19) == 13
        assert source.requests == [1]

    def test_out_of_range_draw_is_rejected(self, scripted_provider) -> None:
        # range 9: 0x0C (12) rejected, 0x0A (10) rejected, 0x09 accepted
        provider, source = scripted_provider([0x0C, 0x0A, 0x09])
        assert provider.get_integer(0, 9) == 9
        assert source.requests == [1, 1, 1]

    def test_range_255_uses_one_byte(self, scripted_provider) -> None:
        provider, source = scripted_provider([0xFF])
        assert provider.get_integer(0, 255) == 255
        assert source.requests == [1]

    @pytest.mark.parametrize(
        ("max_value", "draw_size"),
        [(1, 1), (255, 1), (256, 2), (65535, 2), (65536, 3), (2**24 - 1, 3), (2**32 - 1, 4)],
    )
    def test_draw_size_at_byte_boundaries(self, scripted_provider, max_value, draw_size) -> None:
        # Ranges that fill whole bytes take no extra byte per draw.
        provider, source = scripted_provider([0] * draw_size)
        assert provider.get_integer(0, max_value) == 0
        assert source.requests == [draw_size]

    def test_range_256_uses_two_bytes_big_endian(self, scripted_provider) -> None:
        # range 256 -> 9 bits, mask 0x1FF
        provider, source = scripted_provider([0xFF, 0x05, 0x00, 0xFF])
        # 0xFF05 & 0x1FF = 0x105 = 261 > 256 -> reject; 0x00FF = 255 accepted
        assert provider.get_integer(0, 256) == 255
        assert source.requests == [2, 2]

    def test_negative_bounds(self, scripted_provider) -> None:
        provider, _ = scripted_provider([0x03])
        assert provider.get_integer(-5, 5) == -2

    def test_values_stay_in_bounds(self, uniform_provider) -> None:
        for _ in range(2000):
            assert -7 <= uniform_provider.get_integer(-7, 12) <= 12

    def test_every_value_reached(self, uniform_provider) -> None:
        seen = {uniform_provider.get_integer(1, 6) for _ in range(600)}
        assert seen == {1, 2, 3, 4, 5, 6}

    def test_degenerate_source_hits_cap(self) -> None:
        source = ScriptedEntropySource([0xFF] * 10)
        provider = RandomProvider(config=RandConfig(max_rejection_draws=3), sources=[source])
        with pytest.raises(EntropyUnavailableError, match="exceeded 3 draws"):
            provider.get_integer(0, 9, strong=True)
        assert source.call_count == 3

    def test_strong_without_strong_source(self, no_strong_provider) -> None:
        with pytest.raises(EnvironmentUnsupportedError):
            no_strong_provider.get_integer(0, 100, strong=True)
