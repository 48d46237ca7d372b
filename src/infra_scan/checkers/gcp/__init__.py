"""
GCP resource checkers.
"""
