"""Todo service package."""
