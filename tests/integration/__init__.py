"""Integration tests wiring the sync pipeline together without network access."""
