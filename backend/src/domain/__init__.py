"""
Domain layer for the FieldDay competition store: models and services.
"""
