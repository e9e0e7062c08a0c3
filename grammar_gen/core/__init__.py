"""Core components: grammar discovery and the grammar engine boundary."""
