"""Pluggable auth and storage providers."""
