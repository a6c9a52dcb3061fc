from upi_extractor.utils.transaction_parsing import (
    UNKNOWN,
    clean_amount,
    find_utr_candidates,
    normalize_utr,
    parse_amount,
    select_utr,
)


class TestFindUtrCandidates:
    def test_finds_standalone_twelve_digit_numbers(self, sample_raw_text):
        assert find_utr_candidates(sample_raw_text) == ["412345678901", "998877665544"]

    def test_ignores_longer_and_shorter_runs(self):
        text = "Order 12345678901234 ref 12345678901 phone 98765"
        assert find_utr_candidates(text) == []

    def test_empty_text(self):
        assert find_utr_candidates("") == []
        assert find_utr_candidates(None) == []


class TestSelectUtr:
    def test_prefers_four_prefixed_candidate_over_model_answer(self):
        text = "Ref 998877665544\nUTR 412345678901"
        assert select_utr("998877665544", text) == "412345678901"

    def test_uses_four_prefixed_candidate_when_model_gave_none(self):
        text = "Ref 998877665544\nUTR 412345678901"
        assert select_utr(None, text) == "412345678901"
        assert select_utr("", text) == "412345678901"

    def test_keeps_model_answer_when_it_is_a_four_prefixed_candidate(self):
        text = "UTR 412345678901 and 498765432109"
        assert select_utr("498765432109", text) == "498765432109"

    def test_keeps_model_answer_without_four_prefixed_candidates(self):
        text = "Ref 998877665544"
        assert select_utr("312345678901", text) == "312345678901"

    def test_falls_back_to_first_candidate(self):
        text = "Ref 998877665544 and 887766554433"
        assert select_utr(None, text) == "998877665544"

    def test_no_candidates_keeps_model_answer(self):
        assert select_utr("4123 4567 8901", "nothing here") == "4123 4567 8901"
        assert select_utr(None, "nothing here") is None


class TestNormalizeUtr:
    def test_twelve_digits_kept(self):
        assert normalize_utr("412345678901") == "412345678901"

    def test_whitespace_removed(self):
        assert normalize_utr(" 4123 4567 8901 ") == "412345678901"

    def test_wrong_length_becomes_unknown(self):
        assert normalize_utr("41234567890") == UNKNOWN
        assert normalize_utr("4123456789012") == UNKNOWN

    def test_non_digits_become_unknown(self):
        assert normalize_utr("41234567890A") == UNKNOWN
        assert normalize_utr("[12-digit_utr]") == UNKNOWN

    def test_missing_becomes_unknown(self):
        assert normalize_utr(None) == UNKNOWN
        assert normalize_utr("") == UNKNOWN


class TestAmounts:
    def test_clean_amount_strips_markers(self):
        assert clean_amount("₹1,250.00") == "1250.00"
        assert clean_amount("Rs. 1,00,000") == "100000"
        assert clean_amount("INR 499") == "499"

    def test_clean_amount_empty(self):
        assert clean_amount(None) is None
        assert clean_amount("₹ ") is None

    def test_parse_amount(self):
        assert parse_amount("₹1,250.50") == 1250.50
        assert parse_amount("250000") == 250000.0

    def test_parse_amount_without_number(self):
        assert parse_amount("N/A") is None
        assert parse_amount(None) is None
