"""Application layer: access rules, invitations and gallery operations.

Nothing here knows about HTTP. Services take the caller identity as an
argument and raise ``errors.GalleryError`` subclasses; import them from
``photograph.application.services``.
"""
