"""
Heuristics applied to model output before a transaction is stored.

UPI reference numbers (UTRs) are 12 digits and, for the payment apps this
service targets, usually start with ``4``. Amounts come back in whatever
format the screenshot used (``₹1,250.00``, ``Rs. 1250`` ...).
"""
import re
from typing import List, Optional

UTR_LENGTH = 12
UTR_PREFERRED_PREFIX = "4"
UNKNOWN = "unknown"

_UTR_CANDIDATE_PATTERN = re.compile(r"(?<!\d)\d{12}(?!\d)")
_CURRENCY_MARKERS = re.compile(r"(₹|inr|rs\.?)", re.IGNORECASE)
_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")


def find_utr_candidates(raw_text: str) -> List[str]:
    """All standalone 12-digit sequences in ``raw_text``, in order."""
    return _UTR_CANDIDATE_PATTERN.findall(raw_text or "")


def _strip_whitespace(value: Optional[str]) -> str:
    return re.sub(r"\s+", "", value or "")


def select_utr(model_utr: Optional[str], raw_text: str) -> Optional[str]:
    """
    Reconcile the model's UTR with 12-digit numbers found in the raw text.

    A 4-prefixed candidate from the text beats the model's answer unless the
    model already picked a 4-prefixed candidate. With no 4-prefixed
    candidate, the model's answer is kept, falling back to the first
    candidate when the model gave none.
    """
    candidates = find_utr_candidates(raw_text)
    model_value = _strip_whitespace(model_utr)

    preferred = [c for c in candidates if c.startswith(UTR_PREFERRED_PREFIX)]
    if preferred:
        if model_value in preferred:
            return model_value
        return preferred[0]

    if not model_value and candidates:
        return candidates[0]
    return model_utr


def normalize_utr(utr: Optional[str]) -> str:
    """Return the 12-digit UTR or :data:`UNKNOWN`."""
    value = _strip_whitespace(utr)
    if len(value) == UTR_LENGTH and value.isdigit():
        return value
    return UNKNOWN


def clean_amount(amount: Optional[str]) -> Optional[str]:
    """Drop currency markers, commas and whitespace from an amount string."""
    if amount is None:
        return None
    value = _CURRENCY_MARKERS.sub("", str(amount))
    value = value.replace(",", "")
    value = _strip_whitespace(value)
    return value or None


def parse_amount(amount: Optional[str]) -> Optional[float]:
    """Numeric value of an amount string, or None when there is none."""
    cleaned = clean_amount(amount)
    if not cleaned:
        return None
    match = _NUMBER_PATTERN.search(cleaned)
    if not match:
        return None
    return float(match.group(0))
