"""User accounts and landlord profiles."""
