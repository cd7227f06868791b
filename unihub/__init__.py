"""UniHub API - university community platform backend."""
