"""JacketScore backend application package."""
