# Supabase tables: check_ins
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

check_ins:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id, not null)
- gym_id: uuid (foreign key to gyms.id, nullable, ON DELETE SET NULL)
- points_earned: integer (not null, default 0) - visit points plus any goal/streak bonus
- created_at: timestamp (default: now())

Weekly visit counts are computed from these rows; there is no counter column.
"""
