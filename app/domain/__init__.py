"""
app/domain package marker.
"""

from app.domain.project import NormalizationSummary, Project, RecordValidationError

__all__ = [
    "NormalizationSummary",
    "Project",
    "RecordValidationError",
]
