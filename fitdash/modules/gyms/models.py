# Supabase tables: gyms; storage bucket: gym-logos
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

gyms:
- id: uuid (primary key)
- owner_id: uuid (foreign key to auth.users.id, not null)
- name: text (not null)
- tagline: text (nullable)
- city: text (nullable)
- logo_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now(), maintained by trigger)

An owner has at most one gym. This is an application rule, there is no
unique constraint on owner_id.

Storage bucket gym-logos (public):
- objects are written under "<owner user id>/"; storage policies only allow
  writes inside the caller's own folder.
"""
