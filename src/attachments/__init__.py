"""attachments — extensible attachment records for content items."""

__version__ = "0.1.0"
