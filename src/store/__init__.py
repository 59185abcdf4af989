"""Catalog store layer.

This package holds the record schema registry, filter model and
evaluator, and the read-only store answering record queries.
"""
