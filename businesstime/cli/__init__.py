"""
Command-line interface for businesstime.
"""
