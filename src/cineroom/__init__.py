"""Cinema room scheduling service."""
