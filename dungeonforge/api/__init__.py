"""Read-only HTTP preview of generated levels."""
