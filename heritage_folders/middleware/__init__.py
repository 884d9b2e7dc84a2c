"""Application middleware (rate limiting)."""
