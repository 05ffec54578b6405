"""Accessibility scoring and compliance reporting service."""
