"""Application layer of the identity package."""
