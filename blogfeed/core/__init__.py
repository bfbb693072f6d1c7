"""
Core utilities shared across the blog feed.

This package hosts configuration, password helpers, the change feed used by
services to announce mutations and the process-wide error banner.
"""
