"""Domain layer: aggregates, value objects, repository interfaces."""
