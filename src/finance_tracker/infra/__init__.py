"""Infrastructure: database engine and SQLModel-backed repositories."""
