import os
import json
import logging

from .models import (
    Locale,
    Module,
    Post,
    Redirect,
    Route,
    SiteConfig,
    SiteModel,
    parse_list,
)

logger = logging.getLogger('Mosaic.loader')

CONFIG_DOCUMENTS = {
    'redirects': Redirect,
    'modules': Module,
    'routes': Route,
    'posts': Post,
    'locales': Locale,
}


def load_json_list(files, file_path):
    """Decode a JSON array; anything unreadable or malformed counts as empty."""
    raw = files.read_text(file_path)
    if not raw.strip():
        return []
    try:
        documents = json.loads(raw)
    except json.JSONDecodeError as e:
        files.errors += 1
        logger.error(f"Invalid JSON in {file_path}: {e}")
        return []
    if not isinstance(documents, list):
        files.errors += 1
        logger.error(f"Expected a JSON array in {file_path}, got {type(documents).__name__}")
        return []
    return documents


def load_site(config: SiteConfig, files) -> SiteModel:
    """Read the whole site description under ``config.data_path``."""
    config_dir = os.path.join(config.data_path, 'config')
    static_dir = os.path.join(config.data_path, 'modules', 'static')

    entities = {}
    for name, cls in CONFIG_DOCUMENTS.items():
        documents = load_json_list(files, os.path.join(config_dir, f'{name}.json'))
        entities[name] = parse_list(cls, documents)
        logger.debug(f"Loaded {len(entities[name])} {name}")

    return SiteModel(
        config=config,
        locales=entities['locales'],
        routes=entities['routes'],
        modules=entities['modules'],
        posts=entities['posts'],
        redirects=entities['redirects'],
        base_html=files.read_text(os.path.join(config.data_path, 'base.html')),
        header_html=files.read_text(os.path.join(static_dir, 'header.html')),
        sidebar_html=files.read_text(os.path.join(static_dir, 'sidebar.html')),
        footer_html=files.read_text(os.path.join(static_dir, 'footer.html')),
    )
