"""Service layer: detection, safety, responses and orchestration."""
