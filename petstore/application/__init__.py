"""Application layer - ports and the pet service."""
