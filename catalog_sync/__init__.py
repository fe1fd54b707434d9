"""Product catalog identifier sync between MongoDB and Weaviate."""

__version__ = "0.1.0"
