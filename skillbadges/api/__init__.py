"""HTTP routers for SkillBadges."""
