"""
Shared utilities: settings, logging, schemas, errors, the record store and
the activity service client.
"""
