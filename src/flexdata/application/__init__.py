"""Application layer: session-level orchestration of the client engine."""
