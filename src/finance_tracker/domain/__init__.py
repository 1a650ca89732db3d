"""Domain layer: store contracts shared by the engines."""
