"""Persistence implementations for quire_auth."""
