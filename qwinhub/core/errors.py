import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)


class QwinhubError(Exception):
    code = "ERROR"
    status_code = 500
    message = "Unexpected error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


# Identity normalization

class InvalidPhoneError(QwinhubError):
    status_code = 400


class ContainsLetters(InvalidPhoneError):
    code = "PHONE_CONTAINS_LETTERS"
    message = "Phone number must not contain letters"


class InvalidCharacters(InvalidPhoneError):
    code = "PHONE_INVALID_CHARACTERS"
    message = "Phone number contains invalid characters"


class InvalidForRegion(InvalidPhoneError):
    code = "PHONE_INVALID_FOR_REGION"
    message = "Invalid phone number for selected country"


# Templates

class InvalidPlaceholder(QwinhubError):
    code = "INVALID_PLACEHOLDER"
    status_code = 400

    def __init__(self, names):
        self.names = list(names)
        super().__init__(f"Invalid placeholders: {', '.join(self.names)}")


class DraftsMissing(QwinhubError):
    code = "DRAFTS_MISSING"
    status_code = 400
    message = "All 3 email templates (SHARE, RESULT, MONTHLY) must be configured before creating a quiz."


# Quizzes and submissions

class NotFound(QwinhubError):
    code = "NOT_FOUND"
    status_code = 404
    message = "Quiz not found"


class Expired(QwinhubError):
    code = "QUIZ_EXPIRED"
    status_code = 400
    message = "Quiz has expired"


class DuplicateSubmission(QwinhubError):
    code = "DUPLICATE_SUBMISSION"
    status_code = 409
    message = "You have already submitted a response for this quiz"


class SlugConflict(QwinhubError):
    code = "SLUG_CONFLICT"
    status_code = 409
    message = "A quiz with this title already exists. Please choose a different title."


class InvalidQuiz(QwinhubError):
    code = "INVALID_QUIZ"
    status_code = 422


class MalformedCursor(QwinhubError):
    """Raised by cursor decoding; the paginator recovers by serving the first page."""
    code = "MALFORMED_CURSOR"
    status_code = 400
    message = "Malformed cursor"


# Auth

class NotAuthenticated(QwinhubError):
    code = "UNAUTHORIZED"
    status_code = 401
    message = "Unauthorized: Admin access required"


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(QwinhubError)
    async def qwinhub_error_handler(request: Request, exc: QwinhubError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "code": exc.code},
        )

    @app.exception_handler(OperationalError)
    async def storage_error_handler(request: Request, exc: OperationalError):
        logger.error("Storage call failed on %s %s: %s", request.method, request.url.path, exc.orig)
        return JSONResponse(
            status_code=503,
            content={"detail": "Storage unavailable", "code": "STORAGE_UNAVAILABLE"},
        )
