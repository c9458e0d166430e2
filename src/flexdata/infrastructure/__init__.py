"""Infrastructure layer: persistence, HTTP API, remote adapters and storage."""
