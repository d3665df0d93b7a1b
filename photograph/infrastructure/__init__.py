# Infrastructure layer - database access
"""
Infrastructure layer contains:
- Database repositories (sqlite3)
- Async connection pool (aiosqlite)

This layer depends on the domain types in photograph.application.models.
"""
