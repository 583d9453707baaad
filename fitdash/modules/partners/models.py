# Supabase tables: partners
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

partners:
- id: uuid (primary key)
- gym_id: uuid (foreign key to gyms.id, not null, ON DELETE CASCADE)
- company_name: text (not null)
- service_type: text (not null) - e.g. Dental, Massage, Chiropractor, Wellness
- city: text (not null)
- phone: text (not null)
- email: text (not null)
- website: text (not null)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now(), maintained by trigger)

RLS: the gym's owner has full access; members can only select rows whose
gym_id equals their own profile's gym_id.
"""
