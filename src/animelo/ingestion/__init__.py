"""Catalog ingestion."""
