"""HouseHunt web server."""
