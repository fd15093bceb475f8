"""FastAPI routers exposing the employee use cases over HTTP."""
