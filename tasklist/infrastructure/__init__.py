"""Infrastructure: database sessions, store adapters, logging setup."""
