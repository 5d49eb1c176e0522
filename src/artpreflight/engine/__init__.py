"""Traversal and classification engine."""
