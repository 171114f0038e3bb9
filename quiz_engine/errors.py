class QuizEngineError(Exception):
    """Base error carrying the HTTP status it is reported with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_content(self) -> dict:
        return {"message": self.message}


class ConfigurationError(QuizEngineError):
    """A required setting is missing; no request can be served."""


class QuizValidationError(QuizEngineError):
    status_code = 400


class ServiceError(QuizEngineError):
    """The Gemini call failed, was blocked, or returned nothing."""


class ParsingError(QuizEngineError):
    """The model reply held no recognizable or well-formed JSON object."""

    def __init__(self, message: str, raw_response: str):
        super().__init__(message)
        self.raw_response = raw_response

    def to_content(self) -> dict:
        return {"message": self.message, "rawResponse": self.raw_response}
