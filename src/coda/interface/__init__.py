"""User-facing interfaces of coda."""
