"""Logging setup for topic-news."""
