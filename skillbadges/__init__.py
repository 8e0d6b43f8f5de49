"""SkillBadges: a small REST service for student skill badges."""

__version__ = "0.1.0"
