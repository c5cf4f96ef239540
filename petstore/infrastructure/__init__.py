"""Infrastructure layer - configuration, logging, storage adapters and wiring."""
