"""Deterministic wealth audit engine.

Pure domain logic: questionnaire in, metrics + ranked insight alerts out.
No webhooks, storage, or HTTP live here.
"""

from .alert import AlertSpec
from .engine import ENGINE_VERSION, AuditEngine, compute_audit
from .metrics import derive_metrics
from .models import (
    AnalysisResult,
    DerivedMetrics,
    FinancialInput,
    TaxEstimate,
)
from .registry import registry
from .selector import select_insights
from .tax import estimate_tax

# Import the built-in alert table so it registers with the global registry.
from . import alerts as _builtin_alerts  # noqa: F401
