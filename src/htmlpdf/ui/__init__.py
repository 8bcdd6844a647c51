"""User-facing front-ends."""
