"""HTTP layer: FastAPI routers, dependencies, response schemas."""
