"""Application layer: tool schemas and the mediation gateway."""
