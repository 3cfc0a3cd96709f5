import os
import logging
from typing import NamedTuple, Tuple

from .files import join_under
from .locale_text import resolve_inline
from .models import BuildIdentity, Locale, SiteModel

SCRIPT_TAG = '<script src="{src}" type="text/javascript"></script>'


def cache_busted(script_path, build_id):
    """Append the build id query parameter used to bust browser caches."""
    return f"{script_path}?bId={build_id}"


class RenderedModule(NamedTuple):
    html: str = ''
    script_tags: str = ''
    script_paths: Tuple[str, ...] = ()


class ModuleComposer:
    """Load a content module for one locale together with its script tags."""

    def __init__(self, site: SiteModel, build: BuildIdentity, files):
        self.site = site
        self.build = build
        self.files = files
        self.modules_dir = os.path.join(site.config.data_path, 'modules')
        self.logger = logging.getLogger('Mosaic.composer')

    def render(self, module_id: str, locale: Locale) -> RenderedModule:
        module = self.site.module_by_id(module_id)
        if module is None:
            self.logger.debug(f"Module not found, leaving slot empty: {module_id}")
            return RenderedModule()

        source = self.files.read_text(join_under(self.modules_dir, module.src))
        html = resolve_inline(source, locale.id)

        tags = ''.join(
            SCRIPT_TAG.format(src=cache_busted(script, self.build.build_id))
            for script in module.scripts
        )
        return RenderedModule(html=html, script_tags=tags, script_paths=tuple(module.scripts))
