"""
Log search and aggregation tools.
"""
