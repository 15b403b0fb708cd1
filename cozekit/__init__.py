"""Synchronous client for the Coze open API: users, templates, variables and workflow runs."""

__version__ = "0.1.0"