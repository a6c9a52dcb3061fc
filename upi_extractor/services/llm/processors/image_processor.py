import logging
import re
from typing import Optional

from upi_extractor.core.config import settings
from upi_extractor.models.scheme import ProcessingData
from upi_extractor.services.llm.base import BaseLLMProcessor
from upi_extractor.services.llm.models import ImageProcessingRequest
from upi_extractor.services.llm.prompts import (
    AMOUNT_VERIFICATION_PROMPT,
    DATA_EXTRACTION_PROMPT,
    RAW_TEXT_PROMPT,
)
from upi_extractor.utils.exceptions import ExtractionError
from upi_extractor.utils.json_validator import JSONValidator, extract_json_object
from upi_extractor.utils.transaction_parsing import (
    UNKNOWN,
    clean_amount,
    normalize_utr,
    parse_amount,
    select_utr,
)

logger = logging.getLogger(__name__)


class TransactionImageProcessor(BaseLLMProcessor):
    """Reads date, UTR and amount from a payment screenshot."""

    def __init__(self, llm_service, amount_threshold: Optional[float] = None):
        super().__init__(llm_service)
        self.amount_threshold = (
            settings.AMOUNT_VERIFICATION_THRESHOLD if amount_threshold is None else amount_threshold
        )
        self.validator = JSONValidator()

    def extract_text(self, item: ImageProcessingRequest) -> str:
        raw_text = self.llm_service.generate_from_image(RAW_TEXT_PROMPT, item)
        if not raw_text:
            raise ExtractionError("No text could be extracted from the image.")
        return raw_text

    def extract_fields(self, raw_text: str) -> ProcessingData:
        reply = self.llm_service.generate_text(DATA_EXTRACTION_PROMPT.format(raw_text=raw_text))
        return self.validator.validate(extract_json_object(reply))

    def post_processing(self, data: ProcessingData, raw_text: str) -> ProcessingData:
        amount = clean_amount(data.amount_in_inr)
        amount = self.verify_amount(amount, raw_text)

        utr = normalize_utr(select_utr(data.utr, raw_text))

        return data.model_copy(update={"amount_in_inr": amount, "utr": utr})

    def verify_amount(self, amount: Optional[str], raw_text: str) -> Optional[str]:
        """
        Re-ask the model about amounts above the threshold.

        ``correct`` keeps the amount, ``not found`` yields UNKNOWN, a number
        replaces it. Anything else keeps the amount.
        """
        value = parse_amount(amount)
        if value is None or value <= self.amount_threshold:
            return amount

        logger.info(f"Amount {amount} exceeds {self.amount_threshold}, asking model to verify")
        reply = self.llm_service.generate_text(
            AMOUNT_VERIFICATION_PROMPT.format(amount=amount, raw_text=raw_text)
        )
        answer = re.sub(r"[\s.\"'`*]+$|^[\s\"'`*]+", "", reply).lower()

        if answer == "correct":
            return amount
        if answer == "not found":
            return UNKNOWN

        corrected = clean_amount(answer)
        if corrected and re.fullmatch(r"\d+(\.\d+)?", corrected):
            logger.info(f"Model corrected amount {amount} to {corrected}")
            return corrected

        logger.warning(f"Unrecognised amount verification reply: {reply!r}")
        return amount
