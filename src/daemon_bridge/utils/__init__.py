"""Shared utilities for daemon-bridge."""
