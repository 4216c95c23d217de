"""
Shared utilities: structured logging and the exception hierarchy.
"""
