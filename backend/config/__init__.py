"""Configuration package for FieldDay."""
