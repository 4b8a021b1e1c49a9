# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""Voidspan release metadata."""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Voidspan Contributors"
__codename__ = "Threshold"

# Version info tuple for programmatic comparison
VERSION_INFO = (0, 1, 0)
