"""House listings."""
