"""Domain layer — slugs, fields, field types, and instances.

Pure registries with no I/O. Infrastructure (loaders, templates, the
:class:`~attachments.infrastructure.site.Site`) depends on this layer,
never the reverse.
"""
