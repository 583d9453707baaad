# Supabase tables: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key)
- user_id: uuid (unique, references auth.users.id)
- gym_id: uuid (nullable, foreign key to gyms.id, ON DELETE SET NULL)
- name: text (not null) - copied from sign-up metadata
- email: text (not null)
- total_points: integer (not null, default 0)
- weekly_goal: integer (nullable, one of 2, 3, 4)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

RLS: a user can update only their own row; any authenticated user can read
profiles (leaderboards and gym rosters).
"""
