"""Application services backing the HTTP routes."""
