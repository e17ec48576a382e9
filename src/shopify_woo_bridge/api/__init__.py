"""HTTP API for the order bridge."""
