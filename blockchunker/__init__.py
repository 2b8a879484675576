"""Structure-aware document chunking for retrieval pipelines"""

__version__ = "1.0.0"
