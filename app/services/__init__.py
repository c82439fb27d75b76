"""
app/services package marker.
"""

from app.services.project_ingestion_service import (
    CSVHeaderValidationError,
    IngestionResult,
    ProjectIngestionService,
    get_project_ingestion_service,
)
from app.services.report_export_service import ExportedReport, ReportExportService
from app.services.report_pipeline_service import (
    ReportPipelineService,
    ReportRunResult,
    get_report_pipeline_service,
)

__all__ = [
    "CSVHeaderValidationError",
    "ExportedReport",
    "IngestionResult",
    "ProjectIngestionService",
    "ReportExportService",
    "ReportPipelineService",
    "ReportRunResult",
    "get_project_ingestion_service",
    "get_report_pipeline_service",
]
