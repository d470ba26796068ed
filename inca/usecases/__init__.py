"""Use-case layer for backend entity access.

Each module coordinates the transcoding gateway and domain errors without
performing transport I/O directly.
"""
