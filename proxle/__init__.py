"""Proxle daily word game backend."""
