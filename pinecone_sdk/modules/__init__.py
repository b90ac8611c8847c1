"""Feature modules of the SDK."""
