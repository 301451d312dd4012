"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL for a specific domain entity and owns
the table and column names it touches. Callers only see intention-revealing
operations and domain model objects.
"""
