"""HTTP service layer (FastAPI) for the gateway."""
