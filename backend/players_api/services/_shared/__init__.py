"""Shared service primitives: base service and domain errors."""
