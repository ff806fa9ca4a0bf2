"""Framework wiring: configuration, extensions, logging, CORS and errors."""
