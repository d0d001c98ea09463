"""Infrastructure layer — source loading, templates, markup, and the Site."""

from attachments.infrastructure.site import Site

__all__ = ["Site"]
