"""Domain layer - entities, value objects and business rules for the pet catalog."""
