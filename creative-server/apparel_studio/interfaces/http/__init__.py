"""HTTP API: dependency providers and routers."""
