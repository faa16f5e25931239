"""Domain models and pure game rules."""
