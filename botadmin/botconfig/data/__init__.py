"""Bundled factory configuration documents."""
