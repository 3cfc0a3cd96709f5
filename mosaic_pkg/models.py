"""
Data model for Mosaic.

Every entity read from the site description is an immutable dataclass. The
whole description is bundled into a single ``SiteModel`` value which is built
once per run and handed to every component that needs it.
"""

import json
import secrets
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

ANY_LANGUAGE = '_any'

ROUTE_NORMAL = 'normal'
ROUTE_POST = 'post'
ROUTE_IGNORE = 'ignore'

# Go-style RFC 850 layout: "Monday, 02-Jan-06 15:04:05 MST"
RFC850_FORMAT = '%A, %d-%b-%y %H:%M:%S %Z'


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return '' if value is None else str(value)


def _items(data: Dict[str, Any], key: str) -> list:
    value = data.get(key)
    return value if isinstance(value, list) else []


TRUE_STRINGS = ('true', 'yes', 'on', '1')
FALSE_STRINGS = ('false', 'no', 'off', '0', '')


def parse_flag(value: Any) -> bool:
    """Interpret a settings value as a boolean, accepting quoted ``"true"``/``"false"``."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
        raise ValueError(f"Invalid boolean setting: {value!r}")
    return bool(value)


@dataclass(frozen=True)
class Locale:
    id: str
    path: str = ''

    @property
    def folder(self) -> str:
        """Locale path with every separator stripped, e.g. ``/it/`` -> ``it``."""
        return self.path.replace('/', '')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Locale':
        return cls(id=_text(data, 'id'), path=_text(data, 'path'))


@dataclass(frozen=True)
class MultiLanguageText:
    lang_id: str
    text: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MultiLanguageText':
        return cls(lang_id=_text(data, 'lang_id'), text=_text(data, 'text'))


@dataclass(frozen=True)
class PageStructure:
    module_id: str
    animation: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PageStructure':
        return cls(module_id=_text(data, 'id'), animation=_text(data, 'animation'))


@dataclass(frozen=True)
class Route:
    id: str
    path: str
    aliases: Tuple[str, ...] = ()
    structure: Tuple[PageStructure, ...] = ()
    title: Tuple[MultiLanguageText, ...] = ()
    type: str = ROUTE_NORMAL
    auth: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Route':
        return cls(
            id=_text(data, 'id'),
            path=_text(data, 'path'),
            aliases=tuple(str(alias) for alias in _items(data, 'aliases')),
            structure=tuple(PageStructure.from_dict(item) for item in _items(data, 'structure')),
            title=tuple(MultiLanguageText.from_dict(item) for item in _items(data, 'title')),
            type=_text(data, 'type'),
            auth=_text(data, 'auth'),
        )


@dataclass(frozen=True)
class Module:
    id: str
    src: str
    type: str = ''
    scripts: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Module':
        return cls(
            id=_text(data, 'id'),
            src=_text(data, 'src'),
            type=_text(data, 'type'),
            scripts=tuple(str(script) for script in _items(data, 'scripts')),
        )


@dataclass(frozen=True)
class PostMedia:
    type: str = ''
    src: str = ''

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PostMedia':
        if not isinstance(data, dict):
            return cls()
        return cls(type=_text(data, 'type'), src=_text(data, 'src'))


@dataclass(frozen=True)
class PostVersion:
    lang_id: str
    permalink: str
    file: str = ''
    title: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PostVersion':
        return cls(
            lang_id=_text(data, 'lang_id'),
            permalink=_text(data, 'permalink'),
            file=_text(data, 'file'),
            title=_text(data, 'title'),
        )


@dataclass(frozen=True)
class Post:
    id: str
    created_date: str = ''
    last_modified_date: str = ''
    media: PostMedia = field(default_factory=PostMedia)
    versions: Tuple[PostVersion, ...] = ()

    def version_for(self, lang_id: str) -> Optional[PostVersion]:
        """Return the first version written in ``lang_id``, if any."""
        for version in self.versions:
            if version.lang_id == lang_id:
                return version
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Post':
        return cls(
            id=_text(data, 'id'),
            created_date=_text(data, 'created'),
            last_modified_date=_text(data, 'last_modified'),
            media=PostMedia.from_dict(data.get('media')),
            versions=tuple(PostVersion.from_dict(item) for item in _items(data, 'versions')),
        )


@dataclass(frozen=True)
class Redirect:
    path: str
    target: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Redirect':
        return cls(path=_text(data, 'path'), target=_text(data, 'target'))


@dataclass(frozen=True)
class ExportedPage:
    """JSON sidecar written next to every generated page."""
    title: str
    html: str
    scripts: Tuple[str, ...] = ()

    def to_json(self) -> str:
        data = asdict(self)
        data['scripts'] = list(self.scripts)
        return json.dumps(data, ensure_ascii=False, separators=(',', ':'))


@dataclass(frozen=True)
class SiteConfig:
    data_path: str = 'data'
    build_path: str = 'build'
    web_root: str = '/'
    site_title: str = ''
    site_title_separator: str = '|'
    replace_file_extension: bool = False
    minify: bool = False
    markdown_posts: bool = False

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'SiteConfig':
        """Build a config from a merged settings dictionary, ignoring unknown keys."""
        def value(key, default):
            found = settings.get(key)
            return default if found is None else found

        return cls(
            data_path=str(value('data_path', cls.data_path)),
            build_path=str(value('build_path', cls.build_path)),
            web_root=str(value('web_root', cls.web_root)),
            site_title=str(value('site_title', cls.site_title)),
            site_title_separator=str(value('site_title_separator', cls.site_title_separator)),
            replace_file_extension=parse_flag(value('replace_file_extension', False)),
            minify=parse_flag(value('minify', False)),
            markdown_posts=parse_flag(value('markdown_posts', False)),
        )


@dataclass(frozen=True)
class SiteModel:
    config: SiteConfig
    locales: Tuple[Locale, ...] = ()
    routes: Tuple[Route, ...] = ()
    modules: Tuple[Module, ...] = ()
    posts: Tuple[Post, ...] = ()
    redirects: Tuple[Redirect, ...] = ()
    base_html: str = ''
    header_html: str = ''
    sidebar_html: str = ''
    footer_html: str = ''

    def module_by_id(self, module_id: str) -> Optional[Module]:
        """First configured module with ``module_id``; ids are not assumed unique."""
        for module in self.modules:
            if module.id == module_id:
                return module
        return None


@dataclass(frozen=True)
class BuildIdentity:
    build_id: str
    build_time: str

    @classmethod
    def generate(cls) -> 'BuildIdentity':
        return cls(
            build_id=secrets.token_bytes(4).hex().upper(),
            build_time=datetime.now().astimezone().strftime(RFC850_FORMAT),
        )


def parse_list(cls, documents: List[Any]) -> tuple:
    """Turn a decoded JSON array into a tuple of ``cls`` entities, skipping non-objects."""
    return tuple(cls.from_dict(item) for item in documents if isinstance(item, dict))
