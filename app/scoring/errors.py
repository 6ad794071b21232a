from __future__ import annotations


class ATSScoringError(ValueError):
    status_code = 400
    code = "ats_scoring_error"

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class InvalidDocument(ATSScoringError):
    status_code = 422
    code = "invalid_document"


class InvalidConfig(ATSScoringError):
    status_code = 400
    code = "invalid_config"


class InputTooLarge(ATSScoringError):
    status_code = 413
    code = "input_too_large"
