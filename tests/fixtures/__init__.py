"""Static test data shared across unit and integration tests."""
