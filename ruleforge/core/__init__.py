"""
Rule composition and evaluation engine.
"""
