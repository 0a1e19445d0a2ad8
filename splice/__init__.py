"""
Splice - automated timeline assembly toolkit.

Orders and groups media assets, lays them out as contiguous clips on a
timeline, and exports the result as a CMX 3600 Edit Decision List for
finishing in an NLE.
"""

__version__ = "0.1.0"
