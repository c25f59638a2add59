"""Error taxonomy for a single review submission.

Every failure a caller can see derives from ReviewError and carries a
``user_message`` meant for display. The exception text itself is for logs.
"""

from __future__ import annotations


class ReviewError(Exception):
    """Base class for every terminal failure of a review submission."""

    user_message = "Failed to analyze code. Please try again later."


class InvalidCredentialError(ReviewError):
    """No usable API key, or the provider rejected the one we sent."""

    user_message = "Invalid or missing API key. Please check your API key configuration."


class EmptyInputError(ReviewError):
    """The submitted snippet is empty or whitespace only."""

    user_message = "Please enter some code to analyze."


class InputRejectedError(ReviewError):
    """The provider refused the input as oversized or invalid."""

    user_message = "The code sample is too large or contains invalid characters. Please try a shorter sample."


class QuotaExceededError(ReviewError):
    user_message = "API quota exceeded. Please try again later."


class ProviderError(ReviewError):
    """Unrecognised provider failure."""


class ResponseFormatError(ReviewError):
    """The model answered, but not with a usable findings payload.

    The sub-kinds below are logged; callers only ever show the shared message.
    """

    user_message = "Failed to process the code review. Please try again with a different code sample."


class MalformedPayloadError(ResponseFormatError):
    """Response is not JSON, or its top-level value is not an object."""


class MissingFieldError(ResponseFormatError):
    """Response object has no array-valued ``insights`` field."""


class EmptyResultError(ResponseFormatError):
    """No element of ``insights`` survived validation."""
