"""Wire encoders for log events."""
