"""
Data ingestion and decoding module.

Handles tokenising the constituents CSV, resolving header columns to
logical roles and decoding rows into immutable equity records.
"""
