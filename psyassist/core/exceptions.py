# /psyassist/core/exceptions.py

"""
Business-rule errors raised by the service layer.

They all derive from `ValueError`, so callers that only care about "the input
was rejected" can keep catching `ValueError`; the routers use the concrete
classes to pick the HTTP status code.
"""


class ScoreValidationError(ValueError):
    """A score lies outside the permissible range of its scale type."""

    def __init__(self, scale_type: str):
        self.scale_type = scale_type
        super().__init__(f"Invalid score for scale {scale_type}")


class AssessmentNotSavedError(ValueError):
    """An operation needs a persisted assessment, but none was saved yet."""


class ReportPreconditionError(ValueError):
    """A report was requested for an assessment that is not completed."""
