"""Request middleware (correlation id, rate limit)."""
