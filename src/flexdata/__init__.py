"""FlexData - headless CMS with flexible-schema, drag-and-drop ordered collections.

Collections have typed fields and rows of semi-structured data, exposed
through a read-only HTTP proxy and an embeddable player.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
