"""
ladder/ - Ladder API Client
===========================
Read-only lookups against the external Ladder ranking API.
"""
