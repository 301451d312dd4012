"""
models/ - Domain Models
=======================
Plain dataclasses for persisted registrations and the tagged results
returned by the repository and the Ladder client.
"""
