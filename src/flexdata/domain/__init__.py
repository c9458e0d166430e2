"""Domain layer: entities and services free of web framework concerns."""
