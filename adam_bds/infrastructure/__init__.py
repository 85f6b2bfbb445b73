"""Infrastructure adapters: file I/O and console logging."""
