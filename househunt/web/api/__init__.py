"""HouseHunt API package."""
