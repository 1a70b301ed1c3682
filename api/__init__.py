"""HTTP API for the natural-language Postgres insights pipeline."""

__version__ = "0.1.0"
