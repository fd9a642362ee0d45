"""Utility helpers for the Translation Review annotation tool."""
