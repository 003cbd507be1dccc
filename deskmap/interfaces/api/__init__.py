"""HTTP API interface."""
