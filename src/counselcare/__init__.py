"""
CounselCare - Conversation Safety Core

This package provides the sentiment, crisis and response-selection
engine shared by the CounselCare chat surfaces: the AI companion,
the site-wide support chatbot and contact-form triage.

IMPORTANT: Keyword matching is a screening aid, not a diagnosis.
Every high-risk turn is escalated to human crisis resources.
"""

__version__ = "0.1.0"
__author__ = "CounselCare Engineering Team"
