"""
services/ - Business Logic Layer
================================
Orchestration across repositories and tabular report exports.
"""
