"""FastAPI surface of the fuel price dashboard."""
