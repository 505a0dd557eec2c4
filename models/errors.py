"""Errors raised while turning a PDF page range into quiz questions"""

from config.settings import MODEL_ENV_VARS, API_KEY_ENV_VARS


class QuizGenerationError(Exception):
    """Base class; str(error) is a message suitable for the user"""


class InvalidDocumentError(QuizGenerationError):
    """The upload is not a PDF, or the PDF cannot be opened"""

    def __init__(self, message: str = "Failed to read PDF. It might be password protected or corrupted."):
        super().__init__(message)


class PageRangeError(QuizGenerationError):
    """The requested page range holds no pages of the document"""


class ConfigurationError(QuizGenerationError):
    """Missing configuration, detected before any network call"""

    @classmethod
    def missing_api_key(cls) -> "ConfigurationError":
        return cls(
            f"Gemini API key is missing. Add {API_KEY_ENV_VARS[0]} to your .env file."
        )


class GenerationAPIError(QuizGenerationError):
    """Non-success response (or transport failure) from the Gemini API"""

    def __init__(self, status_code: int, provider_message: str):
        self.status_code = status_code
        self.provider_message = provider_message
        message = f"Gemini API {status_code}: {provider_message}"
        if self.model_not_found:
            message += (
                f" Update {MODEL_ENV_VARS[0]} in your .env to one of the supported Gemini models."
            )
        super().__init__(message)

    @property
    def model_not_found(self) -> bool:
        return "not found" in self.provider_message.lower()


class EmptyResponseError(QuizGenerationError):
    def __init__(self):
        super().__init__(
            "Gemini API returned an empty response. Try reducing the page range or switching to a different model."
        )


class ResponseParseError(QuizGenerationError):
    def __init__(self):
        super().__init__(
            "Gemini response was not valid JSON, even after repair. Try a smaller page range or adjust your prompt."
        )


class ResponseFormatError(QuizGenerationError):
    def __init__(self):
        super().__init__("Gemini response format was invalid. Please try regenerating.")


class QuestionCountError(QuizGenerationError):
    """The model returned fewer usable questions than were requested"""

    def __init__(self, actual: int, expected: int):
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Gemini only returned {actual} of the {expected} requested questions. "
            "Try expanding the page range or reducing the desired count."
        )


class GenerationCancelled(QuizGenerationError):
    def __init__(self, message: str = "Generation was cancelled."):
        super().__init__(message)
