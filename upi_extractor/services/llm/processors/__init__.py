from upi_extractor.services.llm.processors.image_processor import TransactionImageProcessor

__all__ = [
    "TransactionImageProcessor",
]
