"""
Infrastructure package.

Implementation details behind the domain layer: resource loading and the
classifier implementations.
"""
