"""
CounselCare Domain Layer

Contains framework-independent types for conversations,
classification results and crisis events.
"""
