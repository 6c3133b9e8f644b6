"""Domain layer for SBO Core.

Entities, enumerations, the error taxonomy and pure aggregation
functions. Nothing in this package performs I/O.
"""
