"""
Email provider package.

Keep package import side-effects to a minimum to avoid pulling SDKs in
before they are needed. Do not import factory/adapters here.
"""

__all__ = [
    "interface",
    "factory",
    "mock",
    "ses",
    "smtp",
]
