"""
skuidsync — retrieve and store Skuid metadata locally.

Extracts retrieved metadata archives into a category directory layout and
reads local manifest/body pairs back into records for deployment.
"""

__version__ = "0.3.0"
