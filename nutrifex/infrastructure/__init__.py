"""Infrastructure layer: configuration, logging, storage and repository adapters."""
