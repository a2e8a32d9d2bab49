"""Domain types for the fuel price dashboard.

Plain frozen dataclasses describing a normalized price quote. They carry no
I/O so sources, resolver and web layer can share them freely.
"""

__all__ = [
    "prices",
]
