"""Infrastructure adapters: SQLite storage, PDF and Excel exporters, importers."""
