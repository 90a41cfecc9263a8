"""Asynchronous client for the SharePoint web part management REST API."""

__version__ = "0.1.0"
