"""Internal helpers shared by the container and its integrations."""
