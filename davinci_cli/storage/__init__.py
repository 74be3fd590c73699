"""Local JSON blob storage."""
