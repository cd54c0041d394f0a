"""
Pydantic-graph pipelines for Buyside.
"""
