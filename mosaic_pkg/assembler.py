"""
Page assembly for Mosaic.

A page starts from the site-wide ``base.html`` skeleton. Placeholder tokens are
substituted in a fixed order, each token at every occurrence, so content
injected by one token only sees the tokens that come after it. ``WEB-ROOT`` is
resolved last, once modules and posts have been expanded.
"""

import os
import logging
from typing import List, NamedTuple, Optional

import mistune

from .composer import ModuleComposer, cache_busted
from .files import join_under
from .locale_text import resolve_list
from .models import (
    ROUTE_POST,
    BuildIdentity,
    ExportedPage,
    Locale,
    Post,
    PostVersion,
    Route,
    SiteModel,
)

PAGE_LANG = '<?gen PAGE-LANG ?>'
PAGE_REPLACE_EXTENSION = '<?gen PAGE-REPLACE-EXTENSION ?>'
PAGE_TITLE = '<?gen PAGE-TITLE ?>'
PAGE_HEADER = '<?gen PAGE-HEADER ?>'
PAGE_SIDEBAR = '<?gen PAGE-SIDEBAR ?>'
PAGE_FOOTER = '<?gen PAGE-FOOTER ?>'
PAGE_MAIN = '<?gen PAGE-MAIN ?>'
POST_TITLE = '<?gen POST-TITLE ?>'
POST_CONTENTS = '<?gen POST-CONTENTS ?>'
BUILD_ID = '<?gen BUILD-ID ?>'
BUILD_TIME = '<?gen BUILD-TIME ?>'
WEB_ROOT = '<?gen WEB-ROOT ?>'

ALL_TOKENS = (
    PAGE_LANG, PAGE_REPLACE_EXTENSION, PAGE_TITLE, PAGE_HEADER, PAGE_SIDEBAR,
    PAGE_FOOTER, PAGE_MAIN, POST_TITLE, POST_CONTENTS, BUILD_ID, BUILD_TIME,
    WEB_ROOT,
)


class AssembledPage(NamedTuple):
    html: str
    exported: ExportedPage
    version: Optional[PostVersion] = None


class _PageState:
    """Values shared by the token resolvers while one page is assembled."""

    def __init__(self, route, locale, version, title):
        self.route = route
        self.locale = locale
        self.version = version
        self.title = title
        self.main_parts: List[str] = []
        self.scripts: List[str] = []


class PageAssembler:
    def __init__(self, site: SiteModel, build: BuildIdentity, files, composer=None):
        self.site = site
        self.config = site.config
        self.build = build
        self.files = files
        self.composer = composer or ModuleComposer(site, build, files)
        self.posts_dir = os.path.join(self.config.data_path, 'posts')
        self.logger = logging.getLogger('Mosaic.assembler')
        self.markdown_parser = self.create_markdown_parser()

        self.page_tokens = [
            (PAGE_LANG, self._page_lang),
            (PAGE_REPLACE_EXTENSION, self._replace_extension),
            (PAGE_TITLE, self._page_title),
            (PAGE_HEADER, lambda state: self.site.header_html),
            (PAGE_SIDEBAR, lambda state: self.site.sidebar_html),
            (PAGE_FOOTER, lambda state: self.site.footer_html),
            (PAGE_MAIN, self._page_main),
        ]
        self.post_tokens = [
            (POST_TITLE, self._post_title),
            (POST_CONTENTS, self._post_contents),
        ]
        self.build_tokens = [
            (BUILD_ID, lambda state: self.build.build_id),
            (BUILD_TIME, lambda state: self.build.build_time),
        ]

    def create_markdown_parser(self):
        """Create a Mistune markdown parser with a custom renderer."""
        class CustomRenderer(mistune.HTMLRenderer):
            def __init__(self):
                super().__init__(escape=False)
            def block_code(self, code, info=None):
                escaped_code = mistune.escape(code)
                return '<pre style="white-space: pre-wrap;"><code>{}</code></pre>'.format(escaped_code)
        return mistune.create_markdown(
            renderer=CustomRenderer(),
            plugins=['table', 'task_lists', 'strikethrough']
        )

    def token_table(self, route: Route):
        """Ordered (token, resolver) pairs applied to a page of ``route``."""
        if route.type == ROUTE_POST:
            return self.page_tokens + self.post_tokens + self.build_tokens
        return self.page_tokens + self.build_tokens

    def page_title(self, route: Route, version: Optional[PostVersion], locale: Locale) -> str:
        title = resolve_list(route.title, locale.id)
        if version is not None:
            title = version.title
        return f"{title} {self.config.site_title_separator} {self.config.site_title}"

    def web_root(self, locale: Locale) -> str:
        return self.config.web_root + locale.path

    def assemble(self, route: Route, post: Optional[Post], locale: Locale, base: Optional[str] = None) -> AssembledPage:
        version = None
        if route.type == ROUTE_POST and post is not None:
            version = post.version_for(locale.id)

        state = _PageState(route, locale, version, self.page_title(route, version, locale))
        page_html = self.site.base_html if base is None else base

        for token, resolver in self.token_table(route):
            page_html = page_html.replace(token, resolver(state))

        web_root = self.web_root(locale)
        page_html = page_html.replace(WEB_ROOT, web_root)
        main_html = ''.join(state.main_parts).replace(WEB_ROOT, web_root)

        exported = ExportedPage(
            title=state.title,
            html=main_html,
            scripts=tuple(cache_busted(script, self.build.build_id) for script in state.scripts),
        )
        return AssembledPage(html=page_html, exported=exported, version=version)

    def _page_lang(self, state):
        return state.locale.folder

    def _replace_extension(self, state):
        return 'true' if self.config.replace_file_extension else 'false'

    def _page_title(self, state):
        return state.title

    def _page_main(self, state):
        parts = []
        for slot in state.route.structure:
            rendered = self.composer.render(slot.module_id, state.locale)
            parts.append(rendered.html + rendered.script_tags)
            state.main_parts.append(rendered.html)
            state.scripts.extend(rendered.script_paths)
        return ''.join(parts)

    def _post_title(self, state):
        return state.version.title if state.version else ''

    def _post_contents(self, state):
        if state.version is None or not state.version.file:
            return ''
        contents = self.files.read_text(join_under(self.posts_dir, state.version.file))
        if self.config.markdown_posts and state.version.file.lower().endswith('.md'):
            return self.markdown_parser(contents)
        return contents
