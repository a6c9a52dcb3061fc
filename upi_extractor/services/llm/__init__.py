"""
LLM Service Package

This package provides LLM-based extraction of payment details from images.

Main exports:
- LLMService: Thin client around the Gemini OpenAI-compatible endpoint
- ImageProcessingRequest: Pydantic model for an uploaded image
- TransactionImageProcessor: image -> raw text -> fields -> cleanup pipeline
"""

from upi_extractor.services.llm.service import LLMService
from upi_extractor.services.llm.models import ImageProcessingRequest
from upi_extractor.services.llm.base import BaseLLMProcessor
from upi_extractor.services.llm.processors import TransactionImageProcessor

__all__ = [
    "LLMService",
    "ImageProcessingRequest",
    "BaseLLMProcessor",
    "TransactionImageProcessor",
]
