"""SocialSync: social graph API and optimistic interaction client."""

__version__ = "0.1.0"
