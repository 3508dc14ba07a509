"""Shared plumbing for the MyCAD back-office services."""
