"""Router API v1."""
