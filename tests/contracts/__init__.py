"""Tests for the contracts package: enums, record shapes and errors."""
