"""CAD dispatch engine."""
