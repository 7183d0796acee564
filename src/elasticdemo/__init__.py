"""Async document-search layer over Elasticsearch, plus a demo workflow."""

__version__ = "0.1.0"
