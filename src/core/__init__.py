"""Core: configuration, domain and deployment services."""
