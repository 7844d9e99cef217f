"""JSON echo service."""
