"""Logging, profiling and error types shared across the project."""
