"""
Billow — receipt OCR ingestion and owner-scoped retrieval.
"""
__version__ = "0.1.0"
