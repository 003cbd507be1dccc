"""Interfaces - HTTP API and CLI."""
