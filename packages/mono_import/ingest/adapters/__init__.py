"""Input adapters: one module per statement export format."""
