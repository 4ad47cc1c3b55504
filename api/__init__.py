"""
REST service for the recipe catalog.
"""
