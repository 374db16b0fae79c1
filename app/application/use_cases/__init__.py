"""Use cases: application services orchestrating domain, store and cache."""
