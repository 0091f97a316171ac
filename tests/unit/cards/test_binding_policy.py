"""
Unit tests for card domain services.
"""
from datetime import timedelta

from cards.domain.services import CardBindingPolicy, CardPageBounds, VerificationOutcome
from core.domain.value_objects import CardStatus
from support.factories import HWID_A, HWID_B, make_bound_card, make_card


class TestCardBindingPolicy:
    """Tests for CardBindingPolicy."""

    def test_unused_card_is_first_use(self, now):
        """Test an unused card is bound on first use."""
        assert CardBindingPolicy.evaluate(make_card(), HWID_A, now) == VerificationOutcome.FIRST_USE

    def test_same_device_is_repeat(self, now):
        """Test the bound device repeats successfully."""
        card = make_bound_card(hwid=HWID_A)
        assert CardBindingPolicy.evaluate(card, HWID_A, now) == VerificationOutcome.REPEAT

    def test_other_device_conflicts(self, now):
        """Test another device is rejected."""
        card = make_bound_card(hwid=HWID_A)
        assert CardBindingPolicy.evaluate(card, HWID_B, now) == VerificationOutcome.CONFLICT

    def test_time_expiry_dominates_binding(self, now):
        """Test a past expiry wins over a matching device."""
        card = make_bound_card(hwid=HWID_A, bound_at=now - timedelta(days=31))
        assert CardBindingPolicy.evaluate(card, HWID_A, now) == VerificationOutcome.EXPIRED_BY_TIME

    def test_time_expiry_dominates_stored_status(self, now):
        """Test an unused card with a past explicit expiry is time expired."""
        card = make_card(expired_at=now - timedelta(minutes=1))
        assert CardBindingPolicy.evaluate(card, HWID_A, now) == VerificationOutcome.EXPIRED_BY_TIME

    def test_stored_expired_status(self, now):
        """Test expired status without a past expiry."""
        card = make_card(status=CardStatus.EXPIRED)
        assert CardBindingPolicy.evaluate(card, HWID_A, now) == VerificationOutcome.EXPIRED

    def test_used_without_hwid_accepted_by_default(self, now):
        """Test a used card without a device is accepted as a repeat."""
        card = make_card(status=CardStatus.USED, used_at=now)
        assert CardBindingPolicy.evaluate(card, HWID_A, now) == VerificationOutcome.REPEAT

    def test_used_without_hwid_rejected_by_policy(self, now):
        """Test the reject policy refuses a used card without a device."""
        card = make_card(status=CardStatus.USED, used_at=now)
        outcome = CardBindingPolicy.evaluate(card, HWID_A, now, accept_unbound_used=False)
        assert outcome == VerificationOutcome.ALREADY_USED


class TestCardPageBounds:
    """Tests for CardPageBounds."""

    def test_default_when_missing(self):
        assert CardPageBounds.clamp_limit(None) == 10

    def test_clamped_to_maximum(self):
        assert CardPageBounds.clamp_limit(500) == 100

    def test_clamped_to_one(self):
        assert CardPageBounds.clamp_limit(0) == 1
        assert CardPageBounds.clamp_limit(-5) == 1

    def test_in_range_kept(self):
        assert CardPageBounds.clamp_limit(25) == 25
