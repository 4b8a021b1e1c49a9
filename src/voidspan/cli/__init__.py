"""Voidspan command-line interface."""
