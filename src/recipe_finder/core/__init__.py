"""Core infrastructure: configuration, errors, middleware, rate limiting."""
