"""
Service listing tool.
"""
