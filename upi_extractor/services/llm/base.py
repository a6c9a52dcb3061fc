from abc import ABC, abstractmethod
from typing import Any

from upi_extractor.models.scheme import ProcessingData


class BaseLLMProcessor(ABC):
    """
    Abstract base class for LLM processing.
    Defines the contract for turning an input item into ProcessingData.
    """

    def __init__(self, llm_service):
        self.llm_service = llm_service

    @abstractmethod
    def extract_text(self, item: Any) -> str:
        """
        Get the raw text the structured fields will be read from.

        Args:
            item: Input item (an image request, a text blob, ...)

        Returns:
            Raw text content
        """
        pass

    @abstractmethod
    def extract_fields(self, raw_text: str) -> ProcessingData:
        """
        Ask the model for the structured fields found in ``raw_text``.
        """
        pass

    @abstractmethod
    def post_processing(self, data: ProcessingData, raw_text: str) -> ProcessingData:
        """
        Clean up the model's answer using the raw text.

        Args:
            data: Fields returned by the model
            raw_text: Text the fields were read from

        Returns:
            Post-processed fields
        """
        pass

    def process(self, item: Any) -> ProcessingData:
        """
        Main processing pipeline: raw text, then fields, then cleanup.
        Errors propagate to the caller; nothing is retried.
        """
        raw_text = self.extract_text(item)
        data = self.extract_fields(raw_text)
        return self.post_processing(data, raw_text)
