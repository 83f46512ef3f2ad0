"""Scanner and fixer for unsafe file access patterns."""

__version__ = "0.1.0"
