"""
Services

- config/ - Settings store, local persistence and remote sync
- system/ - Restart handling and the local control endpoint
"""
