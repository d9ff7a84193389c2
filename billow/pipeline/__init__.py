"""
Billow core pipeline.

Upload bytes → binary store + OCR → receipt store → owner-scoped retrieval.
"""
from billow.pipeline.blobs import BlobStore
from billow.pipeline.ingest import IngestionPipeline, IngestStage
from billow.pipeline.recognizer import RecognitionAdapter, tesseract_engine
from billow.pipeline.retrieval import RetrievalService

__all__ = [
    "BlobStore",
    "IngestionPipeline",
    "IngestStage",
    "RecognitionAdapter",
    "RetrievalService",
    "tesseract_engine",
]
