"""Application composition layer.

Modules in this package load settings and wire adapters into a ready-to-use
transcoding gateway without placing business logic in the wiring.
"""
