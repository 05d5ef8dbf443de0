"""Desktop simulator (pygame)."""
