"""
app/validators package marker.
"""

from app.validators.project_validator import ProjectRowValidator, REQUIRED_COLUMNS

__all__ = [
    "ProjectRowValidator",
    "REQUIRED_COLUMNS",
]
