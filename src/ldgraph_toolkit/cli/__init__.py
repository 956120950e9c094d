"""
Command-line interface for the linked-data graph toolkit.
"""
