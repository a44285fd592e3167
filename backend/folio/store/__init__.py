"""Store Layer — declarative table specs and the SQL-backed versioned table."""
