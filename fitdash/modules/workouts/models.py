# Supabase tables: workouts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

workouts:
- id: uuid (primary key)
- user_id: uuid (not null)
- gym_id: uuid (foreign key to gyms.id, nullable)
- workout_type: text (not null) - weights | cardio | aerobics | hiit | spinning | other
- exercises: jsonb (not null, default '[]') - [{name, sets, reps, duration_minutes, is_ai_suggested}]
- total_duration_minutes: integer (not null, default 0)
- calories_burned: integer (not null, default 0)
- points_earned: integer (not null, default 0)
- created_at: timestamp (default: now())

Rows are written once per logged session and never updated.
"""
