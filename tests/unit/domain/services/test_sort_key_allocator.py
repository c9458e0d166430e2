"""Unit tests for order key allocation."""

import math

import pytest

from flexdata.domain.services.sort_key_allocator import (
    DEFAULT_STEP,
    allocate_key,
    append_key,
    needs_rebalance,
    rebalance_keys,
)


class TestAllocateKey:

    def test_no_neighbours(self):
        assert allocate_key(None, None) == 1000

    def test_first_position_halves_right_neighbour(self):
        assert allocate_key(None, 2000) == 1000

    def test_last_position_adds_step(self):
        assert allocate_key(1000, None) == 2000

    def test_between_two_items_uses_midpoint(self):
        assert allocate_key(1000, 3000) == 2000

    def test_custom_step(self):
        assert allocate_key(None, None, step=10) == 10
        assert allocate_key(5, None, step=10) == 15

    @pytest.mark.parametrize(
        "left,right",
        [(1000.0, 1000.5), (-50.0, 50.0), (0.0, 0.001)],
    )
    def test_result_is_strictly_between_neighbours(self, left, right):
        key = allocate_key(left, right)
        assert left < key < right


class TestAppendKey:

    def test_empty_scope(self):
        assert append_key([]) == DEFAULT_STEP

    def test_max_plus_step(self):
        assert append_key([3000.0, 1000.0, 2000.0]) == 4000.0

    def test_absent_keys_are_ignored(self):
        assert append_key([None, 1500.0, None]) == 2500.0
        assert append_key([None]) == DEFAULT_STEP


class TestRebalance:

    def test_needs_rebalance_detects_exhausted_gap(self):
        left = 1.0
        right = math.nextafter(left, 2.0)
        key = allocate_key(left, right)
        assert needs_rebalance(left, key, right) is True

    def test_needs_rebalance_false_for_valid_key(self):
        assert needs_rebalance(1000.0, 1500.0, 2000.0) is False
        assert needs_rebalance(None, 500.0, 1000.0) is False
        assert needs_rebalance(1000.0, 2000.0, None) is False

    def test_needs_rebalance_true_when_key_collides(self):
        assert needs_rebalance(1000.0, 1000.0, 1000.0) is True
        assert needs_rebalance(None, 0.0, 0.0) is True

    def test_rebalance_keys_are_evenly_spaced(self):
        assert list(rebalance_keys(4)) == [1000.0, 2000.0, 3000.0, 4000.0]
        assert list(rebalance_keys(0)) == []
