from upi_extractor.controller.controller import AdminController, ImageController, LogController

__all__ = [
    "AdminController",
    "ImageController",
    "LogController",
]
