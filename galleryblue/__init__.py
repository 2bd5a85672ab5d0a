"""GalleryBlue: user accounts and an image gallery over Connect RPC."""

__version__ = "0.1.0"
