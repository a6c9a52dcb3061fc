import base64

from pydantic import BaseModel, ConfigDict


DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"


class ImageProcessingRequest(BaseModel):
    """
    An uploaded image on its way to the model.
    """
    model_config = ConfigDict(frozen=True)

    image_bytes: bytes
    mime_type: str = DEFAULT_IMAGE_MIME_TYPE

    @property
    def image_base64(self) -> str:
        return base64.b64encode(self.image_bytes).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.image_base64}"
