"""
Knowledge Scout - document upload, AI summaries and document Q&A API.
"""
__version__ = "1.0.0"
