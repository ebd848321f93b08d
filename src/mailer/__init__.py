"""
Transactional email sending service.

Keep package import side-effects to a minimum: import submodules explicitly.
"""

__version__ = "0.1.0"
