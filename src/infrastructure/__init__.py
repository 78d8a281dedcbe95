"""Infrastructure adapters implementing domain ports (file I/O lives here)."""
