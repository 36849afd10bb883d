from __future__ import annotations

from .models import ResultStatus


class RecommendationError(Exception):
    """A condition reported to the caller before the pipeline runs."""

    status: ResultStatus = ResultStatus.no_match
    message: str = "Unable to generate recommendations."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidPromptError(RecommendationError):
    status = ResultStatus.invalid_prompt
    message = "Please provide a prompt describing what you are looking for."


class OracleNotConfiguredError(RecommendationError):
    status = ResultStatus.not_configured
    message = (
        "Generation service is not configured. "
        "Please add GROQ_API_KEY to your environment variables."
    )


class EmptyCatalogError(RecommendationError):
    status = ResultStatus.empty_catalog
    message = "No food items available in the catalog."
