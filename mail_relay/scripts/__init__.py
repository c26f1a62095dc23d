"""Operator scripts for checking the relay's configuration."""
