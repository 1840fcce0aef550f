"""Exception types and shared error messages."""

ERROR_DECODING_IMAGE = "Error decoding image"
ERROR_OPENING_VIDEO = "Error opening video"
ERROR_OPENING_RESOURCE = "Error opening resource"
ERROR_READING_GIF_HEADER = "Cannot read GIF header"
ERROR_DATA = "Data error"
ERROR_RESIZE = "Image resizing error"


class AsciiMotionError(Exception):
    """Base class for every error raised by this package."""

    prefix = ""

    def __init__(self, message: str) -> None:
        self.message = message
        text = f"{self.prefix}: {message}" if self.prefix else message
        super().__init__(text)


class ApplicationError(AsciiMotionError):
    """Failure while opening media or talking to the outside world."""

    prefix = "Application error"


class PipelineError(AsciiMotionError):
    """Failure inside the image conversion pipeline."""

    prefix = "Image pipeline error"