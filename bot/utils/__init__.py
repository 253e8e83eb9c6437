"""Bot utilities."""
