"""Test fixtures for the DeFi IDE backend.

- filesystem: in-memory and on-disk project trees
- templates: template directories built on disk
- api: TestClient wired to a temporary Workspace
"""
