"""
Described types used by the package scan tests
"""
