"""GUI adapter layer.

This package provides thin Qt-shaped adapters over engine stores.

Notes
-----
Adapters exist to:
- keep GUI code free of persistence details,
- turn store change notifications into Qt signals,
- expose store contents as Qt item models.
"""
