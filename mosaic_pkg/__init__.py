"""
Mosaic - A small multi-language static site generator.

Mosaic reads a declarative site description (routes, content modules, posts,
locales and redirects) and writes one HTML page plus a JSON sidecar for every
route, alias and post version in every locale.
"""

__version__ = "1.0.0"
__author__ = "Mosaic contributors"

from .core import Mosaic
from .models import SiteConfig, SiteModel, BuildIdentity

__all__ = ['Mosaic', 'SiteConfig', 'SiteModel', 'BuildIdentity']
