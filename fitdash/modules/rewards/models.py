# Supabase tables: reward_redemptions
# The rewards catalogue itself is static configuration (fitdash.config.scoring.REWARDS)

"""
Expected Supabase table structure:

reward_redemptions:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id, not null)
- gym_id: uuid (foreign key to gyms.id, nullable)
- reward_id: text (not null) - id from the catalogue
- points_spent: integer (not null)
- created_at: timestamp (default: now())
"""
