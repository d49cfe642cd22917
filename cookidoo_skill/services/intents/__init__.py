"""Intent handler modules."""
