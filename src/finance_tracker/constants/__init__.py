"""Static configuration data shared across the application."""
