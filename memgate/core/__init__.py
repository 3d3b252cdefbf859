"""Core domain, ports and services for memgate."""
