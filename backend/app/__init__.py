"""Cowork backend application."""
