"""Organization invitations and their tracking file."""
