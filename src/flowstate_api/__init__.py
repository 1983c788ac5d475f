"""flowstate-api - HTTP service for playlist generation."""
