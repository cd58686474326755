"""Command-line interface for agentlens."""
