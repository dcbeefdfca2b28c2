"""Disk storage, buffer pool, catalog, database management and transaction types of a small relational database."""

__version__ = "0.1.0"