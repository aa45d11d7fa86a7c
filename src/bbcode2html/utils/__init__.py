#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Escaping, URL safety and I/O helpers."""
