"""Infrastructure adapters: database, document store and media hosts."""
