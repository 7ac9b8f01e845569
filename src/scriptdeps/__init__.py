from __future__ import annotations

"""
scriptdeps: file dependency discovery for heterogeneous script collections.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
