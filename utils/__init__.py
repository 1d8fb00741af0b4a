"""
Shared helpers: JSON serialization of driver values and the raw SQL audit log.
"""
