"""Domain entities and business rules."""
