"""
Tests Package - Unit and Integration Tests

Test structure:
- tests/conftest.py - Shared pytest fixtures (temp store, stubbed activity service)
- tests/test_store.py - Record store persistence and parsing
- tests/test_activity.py - Activity client error mapping
- tests/test_pipeline.py - Create pipeline stages and partial failure
- tests/test_api.py - HTTP surface, including concurrent creates
- tests/test_config.py, tests/test_logging.py - Ambient configuration
"""
