"""
Room supervision scheduler: distributes candidates over two-person and
one-person rooms for a fixed number of days with randomized retry search.

No candidate sits in the same room twice, and no two candidates share a
two-person room twice.
"""

__version__ = "1.0.0"
