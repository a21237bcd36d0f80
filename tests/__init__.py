"""
Library Catalog Test Suite

Tests are organized into:
- unit/: Service, schema and handler tests against in-memory fakes and mocks
- integration/: Repository, seeding and API tests against SQLite
"""
