# Supabase Auth + public.user_roles
# Authentication is handled by Supabase Auth (auth.users table).
# Roles are stored in public.user_roles; see supabase/migrations.

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (name stored in user_metadata)
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

Expected Supabase table structure:

user_roles:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- role: app_role enum (admin | owner | member)
- created_at: timestamp (default: now())
- unique constraint on (user_id, role)

A profiles row is created for every new auth user by the
handle_new_user trigger.
"""
