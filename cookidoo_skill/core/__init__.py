"""Technology-agnostic core: configuration, logging, domain models and ports."""
