"""Shared test helpers for Livery."""
