"""Profile domain module.

Stored user records, the viewing context of a request, and the
sanitized representation sent back to API clients.
"""
