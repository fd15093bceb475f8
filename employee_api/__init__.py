"""Employee records service: validated entities persisted in a JSON file."""
