"""
Trace search and aggregation tools.
"""
