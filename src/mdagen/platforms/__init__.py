"""Platforms bundled with mdagen.

Each subdirectory is one platform: project scripts and templates at its top
level, one subdirectory per stereotype.
"""
