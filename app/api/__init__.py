"""HTTP layer: request dependencies and versioned routers."""
