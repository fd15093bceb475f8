"""
Core utilities shared across the employee service: settings, logging setup
and the bounded worker pool used for asynchronous reads.
"""
