"""cleanarch -- scaffolds a Go clean-architecture API service skeleton."""

__version__ = "0.1.0"
