"""
Buyside command line interface
"""
