# Area: Game Tests
"""Tests for the per-player timebank."""

import pytest

from arena_engine._game.timebank import Timebank


class TestTimebank:
    """Tests for budget, settle and exhaust."""

    def test_starts_full(self):
        """A new timebank holds timebank_max."""
        bank = Timebank(10000, 500)
        assert bank.remaining == 10000
        assert bank.budget() == 10000

    def test_settle_debits_and_credits(self):
        """Elapsed time is debited, time_per_move credited."""
        bank = Timebank(10000, 500)
        assert bank.settle(3000) == 7500

    def test_settle_is_capped(self):
        """The credit never pushes the bank above its maximum."""
        bank = Timebank(10000, 500)
        assert bank.settle(100) == 10000

    def test_settle_never_goes_negative_before_credit(self):
        """Overrunning the bank leaves only the per-move credit."""
        bank = Timebank(1000, 200)
        assert bank.settle(5000) == 200

    def test_negative_elapsed_counts_as_zero(self):
        """A clock skew cannot add time."""
        bank = Timebank(1000, 0)
        bank.settle(400)
        assert bank.settle(-50) == 600

    def test_exhaust_empties_bank(self):
        """A timeout consumes everything."""
        bank = Timebank(10000, 500)
        bank.exhaust()
        assert bank.remaining == 0
        assert bank.budget() == 0

    def test_rejects_negative_values(self):
        """Negative budgets make no sense."""
        with pytest.raises(ValueError):
            Timebank(-1, 0)
        with pytest.raises(ValueError):
            Timebank(100, -5)
