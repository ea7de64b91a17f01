"""Infrastructure adapters (database engine, SQL repositories)."""
