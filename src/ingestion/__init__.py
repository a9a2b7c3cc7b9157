"""Data ingestion: schema inference from uploaded tabular files."""

__version__ = "0.1.0"
