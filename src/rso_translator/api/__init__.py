"""HTTP surface of the translation service (FastAPI)."""
