"""
Buyside - AI-assisted ad campaign dashboard

Create ad campaigns with text/image creatives, enrich them with
Gemini-derived keywords, an automated policy review and a semantic
description, and persist them to Supabase.
"""

__version__ = "1.0.0"
__author__ = "Buyside Team"
