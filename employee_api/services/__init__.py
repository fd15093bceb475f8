"""
High-level use cases for the employee service.

Routers call these services instead of manipulating the repository directly.
"""
