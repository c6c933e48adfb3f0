"""Backend services: money helpers and Supabase repositories."""
