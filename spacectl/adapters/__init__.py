"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports: the master channel and
    RPC surface, HTTP uploads, project discovery on disk, the workbench
    builder, and the settings file.

Dependencies:
    Individual submodules depend on ``websockets``, ``pydantic``,
    ``requests``, filesystem APIs, and domain protocol definitions.

Call context:
    Imported by ``spacectl.app.runner`` for runtime wiring and by tests.
"""
