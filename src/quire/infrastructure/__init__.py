"""Infrastructure layer: persistence and other technical adapters."""
