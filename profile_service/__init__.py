"""User profile service.

Builds the sanitized, enriched user representation returned by the
profile API: privacy filtering, follow statistics, account state,
domain features and user preferences.
"""

__version__ = "0.1.0"
