"""User lifecycle operations."""
