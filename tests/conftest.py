"""Test configuration and fixtures for Mosaic tests."""

import pytest
import tempfile
import shutil
import json
import logging
import os
from pathlib import Path

from mosaic_pkg.models import BuildIdentity, SiteConfig
from mosaic_pkg.files import FileStore
from mosaic_pkg.loader import load_site

BASE_HTML = (
    '<html lang="<?gen PAGE-LANG ?>" data-replace-extension="<?gen PAGE-REPLACE-EXTENSION ?>">'
    '<head><title><?gen PAGE-TITLE ?></title></head>'
    '<body><?gen PAGE-HEADER ?><?gen PAGE-SIDEBAR ?>'
    '<main><?gen PAGE-MAIN ?></main>'
    '<?gen PAGE-FOOTER ?><!-- <?gen BUILD-ID ?> / <?gen BUILD-TIME ?> --></body></html>'
)

LOCALES = [
    {'id': 'en', 'path': ''},
    {'id': 'it', 'path': 'it/'},
]

MODULES = [
    {'id': 'home', 'src': 'home.html', 'type': 'html', 'scripts': ['scripts/app.js']},
    {'id': 'about', 'src': 'about.html', 'type': 'html', 'scripts': ['scripts/app.js']},
    {'id': 'post-body', 'src': 'post.html', 'type': 'html', 'scripts': []},
]

ROUTES = [
    {
        'id': 'home',
        'path': '/',
        'aliases': ['/home'],
        'structure': [{'id': 'home'}, {'id': 'about'}, {'id': 'missing'}],
        'title': [{'lang_id': 'en', 'text': 'Home'}, {'lang_id': 'it', 'text': 'Inizio'}],
        'type': 'normal',
    },
    {
        'id': 'post',
        'path': '/post',
        'aliases': [],
        'structure': [{'id': 'post-body'}],
        'title': [{'lang_id': '_any', 'text': 'Blog'}],
        'type': 'post',
    },
    {
        'id': 'drafts',
        'path': '/drafts',
        'structure': [{'id': 'home'}],
        'title': [{'lang_id': '_any', 'text': 'Drafts'}],
        'type': 'ignore',
    },
]

POSTS = [
    {
        'id': '1',
        'created': '2024-01-01',
        'last_modified': '2024-01-02',
        'media': {'type': 'image', 'src': 'images/logo.txt'},
        'versions': [
            {'lang_id': 'en', 'permalink': 'hello-world', 'file': 'hello.en.html', 'title': 'Hello, world'},
            {'lang_id': 'it', 'permalink': 'ciao-mondo', 'file': 'hello.it.html', 'title': 'Ciao, mondo'},
        ],
    },
    {
        'id': '2',
        'versions': [
            {'lang_id': 'en', 'permalink': 'english-only', 'file': 'english.html', 'title': 'English only'},
        ],
    },
]

REDIRECTS = [
    {'path': '/blog', 'target': 'post/hello-world.html'},
]

DATA_FILES = {
    'base.html': BASE_HTML,
    'modules/static/header.html': '<header><a href="<?gen WEB-ROOT ?>index.html">Site</a></header>',
    'modules/static/sidebar.html': '<nav>sidebar</nav>',
    'modules/static/footer.html': '<footer>footer</footer>',
    'modules/home.html': (
        '<div><? START-LANG [en] ?>Hello<? END-LANG ?><? START-LANG [it] ?>Ciao<? END-LANG ?>'
        '<a href="<?gen WEB-ROOT ?>about.html">About</a></div>'
    ),
    'modules/about.html': '<p>About</p>',
    'modules/post.html': '<article><h1><?gen POST-TITLE ?></h1><?gen POST-CONTENTS ?></article>',
    'posts/hello.en.html': '<p>Hello!</p>',
    'posts/hello.it.html': '<p>Ciao!</p>',
    'posts/english.html': '<p>Only in English, build <?gen BUILD-ID ?></p>',
    'css/style.css': 'body {\n    color: black;\n}\n',
    'scripts/app.js': 'function hello() {\n    return 1;\n}\n',
    'images/logo.txt': 'not really an image',
}


@pytest.fixture(autouse=True)
def reset_mosaic_logger():
    """Drop handlers added by Mosaic instances so each test starts clean."""
    yield
    logger = logging.getLogger('Mosaic')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def mock_data_dir(temp_dir):
    """Create a complete two-language site description."""
    data_dir = Path(temp_dir) / 'data'
    config_dir = data_dir / 'config'
    config_dir.mkdir(parents=True)

    documents = {
        'locales': LOCALES,
        'modules': MODULES,
        'routes': ROUTES,
        'posts': POSTS,
        'redirects': REDIRECTS,
    }
    for name, value in documents.items():
        (config_dir / f'{name}.json').write_text(json.dumps(value), encoding='utf-8')

    for relative_path, content in DATA_FILES.items():
        file_path = data_dir / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding='utf-8')

    return str(data_dir)


@pytest.fixture
def site_config(mock_data_dir, temp_dir):
    """Site configuration pointing at the mock data directory."""
    return SiteConfig(
        data_path=mock_data_dir,
        build_path=str(Path(temp_dir) / 'build'),
        web_root='https://example.com/',
        site_title='Test Site',
        site_title_separator='|',
        replace_file_extension=True,
    )


@pytest.fixture
def identity():
    """Fixed build identity for predictable output."""
    return BuildIdentity(build_id='ABCD1234', build_time='Monday, 01-Jan-24 00:00:00 UTC')


@pytest.fixture
def files():
    return FileStore()


@pytest.fixture
def site(site_config, files):
    """Loaded site model for the mock data directory."""
    return load_site(site_config, files)
