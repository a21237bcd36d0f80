"""
Library Catalog

A layered HTTP API over a relational catalog of books.
"""

__version__ = "1.0.0"
