"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP transport,
    credential storage) and the transcoding gateway that wraps the transport.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by app composition modules (for runtime wiring) and by tests (for
    stubs and transport-level behavior verification).
"""
