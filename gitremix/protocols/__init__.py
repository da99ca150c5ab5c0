"""
Protocols for type safety.

This package provides protocols that define the read and write sides of
the Git data API, enabling type checking without requiring inheritance.
"""

from .git_data_protocol import GitDataReader, GitDataWriter

__all__ = ["GitDataReader", "GitDataWriter"]
