"""
Persistence adapters.

Services depend on the repository object they are given; they never touch
the JSON file directly.
"""
