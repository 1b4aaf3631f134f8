"""Signup, login and token handling."""
