"""Infrastructure layer — filesystem access and site scanning.

Depends on domain; never imported by it.
"""
