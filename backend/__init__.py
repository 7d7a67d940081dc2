"""Card scanner backend."""
