"""Tests for secondary PII validation, masking, and scoring helpers."""

import pytest

from foia_intel.logic.scoring import clamp, round_half_up, round_int
from foia_intel.logic.validators import (
    ValidationLogic,
    mask_value,
    mask_window,
    validate_credit_card,
    validate_ssn,
)


class TestLuhn:
    def test_valid_card_number(self):
        assert ValidationLogic.luhn_check("4111111111111111")

    def test_invalid_card_number(self):
        assert not ValidationLogic.luhn_check("4111111111111112")

    def test_non_digits_rejected(self):
        assert not ValidationLogic.luhn_check("4111-1111")

    def test_credit_card_accepts_separators(self):
        assert validate_credit_card("4111 1111 1111 1111")
        assert validate_credit_card("4111-1111-1111-1111")

    def test_credit_card_rejects_short_numbers(self):
        assert not validate_credit_card("4111 1111")


class TestSSN:
    def test_structurally_valid(self):
        assert validate_ssn("123-45-6789")

    @pytest.mark.parametrize(
        "ssn",
        ["000-12-3456", "666-12-3456", "900-12-3456", "999-12-3456", "123-00-4567", "123-45-0000"],
    )
    def test_structurally_invalid(self, ssn):
        assert not validate_ssn(ssn)

    def test_wrong_shape(self):
        assert not validate_ssn("123456789")


class TestMasking:
    def test_mask_value_keeps_edges_only(self):
        assert mask_value("123-45-6789") == "***12...89***"

    def test_mask_window_by_offset(self):
        text = "ZIP 90210 and again ZIP 90210 end"
        assert mask_window(text, 0, len(text), [(24, 29)]) == "ZIP 90210 and again ZIP *** end"

    def test_mask_window_masks_every_span(self):
        text = "Email jane@acme.com or call 555-123-4567."
        spans = [(28, 40), (6, 19)]
        assert mask_window(text, 0, len(text), spans) == "Email *** or call ***."

    def test_mask_window_clips_spans_at_edges(self):
        text = "0123456789"
        assert mask_window(text, 2, 8, [(0, 4), (7, 12)]) == "***456***"

    def test_mask_window_merges_overlapping_spans(self):
        text = "abcdefghij"
        assert mask_window(text, 0, 10, [(2, 6), (4, 8)]) == "ab***ij"

    def test_mask_window_without_spans(self):
        assert mask_window("nothing here", 0, 12, []) == "nothing here"


class TestScoringHelpers:
    def test_round_half_up(self):
        assert round_int(2.5) == 3
        assert round_int(0.625) == 1
        assert round_half_up(0.1 + 0.2, 2) == 0.3

    def test_clamp(self):
        assert clamp(1.1) == 1.0
        assert clamp(-0.5) == 0.0
        assert clamp(0.4) == 0.4
