"""Infrastructure package: storage, metrics and monitoring adapters."""
