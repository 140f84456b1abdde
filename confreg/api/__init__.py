"""HTTP layer - FastAPI application exposing the registration form endpoint."""
