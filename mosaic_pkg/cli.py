#!/usr/bin/env python3
"""
Command-line interface for Mosaic - static site generator.
"""

import os
import sys
import json
import time
import argparse
from typing import Dict, Any
from .core import Mosaic
from .models import SiteConfig
from .settings import MosaicSettings

SAMPLE_LOCALES = [
    {"id": "en", "path": ""},
    {"id": "it", "path": "it/"},
]

SAMPLE_MODULES = [
    {"id": "home", "src": "home.html", "type": "html", "scripts": ["scripts/home.js"]},
    {"id": "post-list", "src": "post-list.html", "type": "html", "scripts": []},
]

SAMPLE_ROUTES = [
    {
        "id": "home",
        "path": "/",
        "aliases": ["/home"],
        "structure": [{"id": "home", "animation": ""}],
        "title": [{"lang_id": "en", "text": "Home"}, {"lang_id": "it", "text": "Inizio"}],
        "type": "normal",
        "auth": "",
    },
    {
        "id": "post",
        "path": "/post",
        "aliases": [],
        "structure": [{"id": "post-list", "animation": ""}],
        "title": [{"lang_id": "_any", "text": "Blog"}],
        "type": "post",
        "auth": "",
    },
]

SAMPLE_POSTS = [
    {
        "id": "1",
        "created": "2025-01-01",
        "last_modified": "2025-01-01",
        "media": {"type": "image", "src": "images/hello.png"},
        "versions": [
            {"lang_id": "en", "permalink": "hello-world", "file": "hello-world.en.html", "title": "Hello, world"},
            {"lang_id": "it", "permalink": "ciao-mondo", "file": "hello-world.it.html", "title": "Ciao, mondo"},
        ],
    },
]

SAMPLE_REDIRECTS = [
    {"path": "/blog", "target": "post/hello-world.html"},
]

SAMPLE_FILES = {
    'base.html': """<!DOCTYPE html>
<html lang="<?gen PAGE-LANG ?>" data-replace-extension="<?gen PAGE-REPLACE-EXTENSION ?>">
<head>
    <meta charset="UTF-8">
    <title><?gen PAGE-TITLE ?></title>
    <link rel="stylesheet" href="/css/style.css?bId=<?gen BUILD-ID ?>">
</head>
<body>
    <?gen PAGE-HEADER ?>
    <?gen PAGE-SIDEBAR ?>
    <main><?gen PAGE-MAIN ?></main>
    <?gen PAGE-FOOTER ?>
    <!-- Built <?gen BUILD-TIME ?> -->
</body>
</html>
""",
    'modules/static/header.html': """<header><a href="<?gen WEB-ROOT ?>index.html">My Mosaic Site</a></header>
""",
    'modules/static/sidebar.html': """<nav><a href="/index.html">English</a> <a href="/it/index.html">Italiano</a></nav>
""",
    'modules/static/footer.html': """<footer>Build <?gen BUILD-ID ?></footer>
""",
    'modules/home.html': """<section>
    <? START-LANG [en] ?><h1>Welcome!</h1><p>This page was built with Mosaic.</p><? END-LANG ?>
    <? START-LANG [it] ?><h1>Benvenuto!</h1><p>Questa pagina è stata generata con Mosaic.</p><? END-LANG ?>
    <a href="<?gen WEB-ROOT ?>post/hello-world.html">Blog</a>
</section>
""",
    'modules/post-list.html': """<article>
    <h1><?gen POST-TITLE ?></h1>
    <?gen POST-CONTENTS ?>
</article>
""",
    'posts/hello-world.en.html': """<p>This is the first post on your new site.</p>
""",
    'posts/hello-world.it.html': """<p>Questo è il primo post del tuo nuovo sito.</p>
""",
    'css/style.css': """body {
    font-family: sans-serif;
}
""",
    'scripts/home.js': """console.log("Hello from Mosaic");
""",
}


def create_starter_structure(data_path: str = 'data') -> None:
    """Create complete starter data directory with config, chunks, modules, posts and assets."""
    data_dir = os.path.join(os.getcwd(), data_path)

    # Create directory structure
    directories = ['config', 'modules/static', 'posts', 'css', 'images', 'scripts']

    for directory in directories:
        dir_path = os.path.join(data_dir, directory)
        if os.path.exists(dir_path):
            print(f"Directory already exists: {data_path}/{directory}")
        else:
            os.makedirs(dir_path, exist_ok=True)
            print(f"Created directory: {data_path}/{directory}")

    documents = {
        'config/locales.json': SAMPLE_LOCALES,
        'config/modules.json': SAMPLE_MODULES,
        'config/routes.json': SAMPLE_ROUTES,
        'config/posts.json': SAMPLE_POSTS,
        'config/redirects.json': SAMPLE_REDIRECTS,
    }
    files = {name: json.dumps(value, indent=2) + '\n' for name, value in documents.items()}
    files.update(SAMPLE_FILES)

    for relative_path, content in files.items():
        file_path = os.path.join(data_dir, relative_path)
        if os.path.exists(file_path):
            print(f"File already exists: {data_path}/{relative_path}")
            continue
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(content)
        print(f"Created file: {data_path}/{relative_path}")

    print("\n✅ Starter structure created successfully!")
    print("\nNext steps:")
    print("1. Edit the configuration file (mosaic.yml)")
    print(f"2. Describe your locales, routes, modules and posts in '{data_path}/config/'")
    print(f"3. Write module and post content in '{data_path}/modules/' and '{data_path}/posts/'")
    print("4. Run 'mosaic' to build your site")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Mosaic - Multi-language Static Site Generator')
    parser.add_argument('config', nargs='?', default=None,
                        help='Configuration file (defaults to mosaic.yml, mosaic.yaml or mosaic.json)')
    parser.add_argument('--data', dest='data_path', type=str,
                        help='Data directory holding the site description')
    parser.add_argument('--build', dest='build_path', type=str,
                        help='Output directory for generated site')
    parser.add_argument('--web-root', dest='web_root', type=str,
                        help='Web root prefixed to every WEB-ROOT link')
    parser.add_argument('--site-title', dest='site_title', type=str,
                        help='Site title appended to every page title')
    parser.add_argument('--site-title-separator', dest='site_title_separator', type=str,
                        help='Separator between page title and site title')
    parser.add_argument('--replace-file-extension', dest='replace_file_extension',
                        action='store_true', default=None,
                        help='Tell pages that links should drop the .html extension')
    parser.add_argument('--minify', action='store_true', default=None,
                        help='Minify copied CSS and JS assets')
    parser.add_argument('--markdown-posts', dest='markdown_posts', action='store_true', default=None,
                        help='Render .md post files to HTML')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter data directory')
    parser.add_argument('--version', action='version', version='%(prog)s 1.0.0')
    return parser


def main() -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args()

    # Handle init command
    if args.init:
        settings_loader = MosaicSettings()
        config_path = settings_loader.create_sample_config(args.init)
        print(f"Created sample configuration file: {config_path}")

        print("\nCreating starter data directory...")
        create_starter_structure()

        print("\nYour new Mosaic site is ready!")
        print("Edit the configuration and data files, then run 'mosaic' to build your site.")
        return

    try:
        # Load settings from configuration file
        settings_loader = MosaicSettings(config_path=args.config)
        settings_loader.load_settings()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Convert argparse Namespace to dict, excluding None values for proper merging
    args_dict: Dict[str, Any] = {k: v for k, v in vars(args).items()
                                 if v is not None and k not in ('config', 'init')}

    # Command line arguments take precedence
    final_settings = settings_loader.merge_with_args(args_dict)
    try:
        config = SiteConfig.from_settings(final_settings)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Record start time
    overall_start_time = time.time()

    try:
        generator = Mosaic(config)
        succeeded = generator.build()

        # Show build statistics
        total_time = time.time() - overall_start_time
        generator.logger.info(f"Site build completed in {total_time:.6f} seconds.")
        generator.logger.info(f"Total pages generated: {generator.pages_generated}")
        generator.logger.info(f"Total posts generated: {generator.posts_generated}")
        generator.logger.info(f"Total aliases generated: {generator.aliases_generated}")
        generator.logger.info(f"Total redirects generated: {generator.redirects_generated}")

        if not succeeded:
            generator.logger.warning("Build finished with errors; see the log file for details.")
            sys.exit(1)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == '__main__':
    main()
