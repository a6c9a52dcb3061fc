import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI

from upi_extractor.core.config import settings
from upi_extractor.services.llm.models import ImageProcessingRequest
from upi_extractor.utils.exceptions import ExternalServiceError, ExtractionError

logger = logging.getLogger(__name__)


class LLMService:
    """
    LLMService encapsulates the logic for:
      - Interacting with the Gemini API through its OpenAI-compatible endpoint
      - Sending text-only and image+text prompts
      - Pulling the reply text out of the completion
    """

    SYSTEM_PROMPT = "You are a document analysis AI that reads payment screenshots."

    def __init__(self, client: Optional[OpenAI] = None, model: Optional[str] = None):
        self.model = model or settings.LLM_MODEL

        if client is None:
            api_key = settings.OPENAI_API_KEY
            if not api_key and "localhost" not in settings.OPENAI_BASE_URL:
                raise ExternalServiceError("Gemini", "OPENAI_API_KEY environment variable is not set")

            client = OpenAI(
                api_key=api_key or "unused",
                base_url=settings.OPENAI_BASE_URL
            )
        self.client = client

    def generate_text(self, prompt: str) -> str:
        """Send a text-only prompt and return the reply text."""
        response = self._call_gemini_api([{"role": "user", "content": prompt}])
        return self._extract_response_text(response)

    def generate_from_image(self, prompt: str, image: ImageProcessingRequest) -> str:
        """Send a prompt together with one image and return the reply text."""
        content = self._build_multimodal_content(prompt, image)
        response = self._call_gemini_api([{"role": "user", "content": content}])
        return self._extract_response_text(response)

    def _build_multimodal_content(self, prompt: str, image: ImageProcessingRequest) -> List[Dict[str, Any]]:
        """Build multimodal content array with text and the image."""
        return [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": image.to_data_url()}},
        ]

    def _call_gemini_api(self, messages: List[Dict[str, Any]]):
        try:
            return self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "system", "content": self.SYSTEM_PROMPT}, *messages],
                temperature=0,
            )
        except Exception as e:
            logger.error(f"Gemini API call failed: {e}")
            raise ExtractionError(details={"reason": "model call failed"}) from e

    def _extract_response_text(self, response) -> str:
        if not response.choices or not response.choices[0].message:
            raise ExtractionError(details={"reason": "empty model response"})

        content = response.choices[0].message.content
        if not content:
            raise ExtractionError(details={"reason": "empty model response"})
        return content.strip()
