"""Ingestion of the panel file: fetch (with cache), parse, and load."""
