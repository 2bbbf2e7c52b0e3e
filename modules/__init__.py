"""
Application Modules.

- backend/: Notes API service, database, configuration
"""
