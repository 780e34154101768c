"""Safety services package."""

from counselcare.services.safety.risk_assessor import RiskAssessor
from counselcare.services.safety.crisis_logger import CrisisEventLogger
from counselcare.services.safety.crisis_resources import (
    CrisisContact,
    CrisisResourceDirectory,
)
from counselcare.services.safety.contact_triage import (
    ContactTriageService,
    TriagePriority,
    TriageResult,
)

__all__ = [
    # Risk
    "RiskAssessor",
    # Crisis logging
    "CrisisEventLogger",
    # Crisis resources
    "CrisisContact",
    "CrisisResourceDirectory",
    # Contact triage
    "ContactTriageService",
    "TriagePriority",
    "TriageResult",
]
