"""blogcast REST API."""
