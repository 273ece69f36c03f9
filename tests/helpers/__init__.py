"""Test doubles and small utilities shared across tests."""
