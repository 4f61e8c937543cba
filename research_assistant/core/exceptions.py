# research_assistant/core/exceptions.py

class ResearchAssistantError(Exception):
    status_code: int = 500

    def __init__(self, message: str = "Request could not be processed"):
        super().__init__(message)
        self.message = message


class RequestValidationError(ResearchAssistantError):
    status_code = 400

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message)


class UnsupportedFileTypeError(ResearchAssistantError):
    status_code = 400

    def __init__(self, filename: str):
        super().__init__(
            f"Unsupported file type: {filename}. Supported types are .txt, .pdf and .docx"
        )
        self.filename = filename


class ExtractionError(ResearchAssistantError):
    status_code = 500

    def __init__(self, message: str = "Failed to extract text from file"):
        super().__init__(message)
