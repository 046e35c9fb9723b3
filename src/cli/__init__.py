"""CLI 도구."""
