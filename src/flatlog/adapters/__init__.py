"""Adapters connecting flatlog to web frameworks and stdlib logging."""
