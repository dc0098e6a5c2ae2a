"""Repositories: opportunity store."""
