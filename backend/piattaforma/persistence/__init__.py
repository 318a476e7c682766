"""Layer di persistenza."""
