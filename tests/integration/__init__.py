"""
Integration tests.

Exercise the caching, plugin and store layers together:
- Adapter names from settings resolved to a shared store
- Storage plugins attached to the store used by a ClassCache
- Module targets as well as class targets

No external services are required; Redis is mocked.
"""
