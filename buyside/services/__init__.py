"""
Services layer: Gemini enrichment, Supabase storage and persistence,
local campaign cache and the campaign repository.
"""
