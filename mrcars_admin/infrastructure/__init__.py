"""Infrastructure adapters (Supabase, Redis)."""
