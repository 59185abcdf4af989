"""Record ingestion.

This package reads record files from a catalog root directory and
parses them into typed records for the store layer.
"""
