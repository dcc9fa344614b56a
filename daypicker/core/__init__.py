"""Calendar math, clock, cache and environment configuration for daypicker."""
