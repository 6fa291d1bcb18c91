"""Transport, batch queue and client services."""
