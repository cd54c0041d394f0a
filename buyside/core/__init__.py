"""
Core configuration, database and model definitions
"""
