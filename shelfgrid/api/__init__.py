"""HTTP API for shelfgrid."""
