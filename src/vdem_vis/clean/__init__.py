"""Cleaning utilities for the loader.

Provides the entity alias table, partition-wise type coercion of raw panel
columns, and Pydantic row validation producing the typed panel frame.
"""
