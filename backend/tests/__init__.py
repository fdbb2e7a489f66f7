"""Test suite for the employee API."""
