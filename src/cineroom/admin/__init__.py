"""SQLAdmin back-office."""
