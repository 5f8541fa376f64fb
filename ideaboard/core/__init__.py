"""
Core utilities shared across the Ideaboard API.

This package hosts configuration helpers (env vars, paths) and cross-cutting
setup such as logging. Repositories, services and routers depend on these
primitives instead of reading os.environ directly.
"""
