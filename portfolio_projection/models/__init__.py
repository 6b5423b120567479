"""Parameter and result data models."""
