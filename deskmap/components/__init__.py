"""
Components package.

Components hold the domain logic (matching, reconciliation, event fan-out,
Graph access). They never open the database themselves.
"""
