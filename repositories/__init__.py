"""
repositories/ - Data Access Layer
==================================
Each repository owns the in-memory collection for one entity and hands
file loading and saving to the storage layer.
"""
