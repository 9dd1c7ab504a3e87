"""Application layer (use cases) for request fingerprinting."""
