"""Estimate Service Module

Fee summaries, clipboard text and the 御見積書 Word export
built on top of fee calculation results.
"""

from .estimate_renderer import EstimateRenderer, estimate_filename, render_estimate_docx
from .estimate_service import build_estimate_document, render_summary_text, summarize_result
from .models import EstimateDetails, EstimateDocument, EstimateRow, FeeSummary, FeeSummaryLine

__all__ = [
    "EstimateDetails",
    "EstimateDocument",
    "EstimateRow",
    "FeeSummary",
    "FeeSummaryLine",
    "EstimateRenderer",
    "estimate_filename",
    "render_estimate_docx",
    "build_estimate_document",
    "render_summary_text",
    "summarize_result",
]
