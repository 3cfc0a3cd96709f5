import os
import shutil
import logging
from datetime import datetime

import csscompressor
import rjsmin

from .assembler import PageAssembler
from .files import FileStore, join_under
from .loader import load_site
from .models import ROUTE_IGNORE, ROUTE_NORMAL, ROUTE_POST, BuildIdentity, SiteConfig
from .redirects import make_redirect_page

STATIC_FOLDERS = ['css', 'images', 'scripts']
POST_FOLDER = 'post'


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages (and every warning) to be shown in the console."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        allowed_messages = [
            "Building site",
            "Using locale",
            "is set to be ignored",
            "Site build completed in",
            "Total pages generated:",
            "Total posts generated:",
            "Total aliases generated:",
            "Total redirects generated:",
            "Copied static folder",
            "Minified",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def page_slug(route_path):
    """Output file stem for a route or alias path; the site root maps to ``index``."""
    if route_path == '/':
        return 'index'
    return route_path[1:] if route_path.startswith('/') else route_path


class Mosaic:
    def __init__(self, config: SiteConfig, identity: BuildIdentity = None, files: FileStore = None, logs_dir=None):
        self.config = config
        self.identity = identity or BuildIdentity.generate()
        self.files = files or FileStore()
        self.logs_dir = logs_dir or os.path.join(os.getcwd(), 'logs')
        self.build_path = config.build_path
        self.data_path = config.data_path
        self.site = None
        self.assembler = None

        self.pages_generated = 0
        self.posts_generated = 0
        self.aliases_generated = 0
        self.redirects_generated = 0

        self.setup_logging()

    @property
    def errors(self):
        return self.files.errors

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('Mosaic')
        self.logger.setLevel(logging.DEBUG)

        if not self.logger.handlers:
            # Console handler with filter
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.addFilter(InfoFilter())
            console_formatter = logging.Formatter('%(message)s')
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

            # File handler for all logs
            try:
                os.makedirs(self.logs_dir, exist_ok=True)
                log_filename = datetime.now().strftime('mosaic_%Y-%m-%d_%H-%M-%S.log')
                file_handler = logging.FileHandler(os.path.join(self.logs_dir, log_filename))
                file_handler.setLevel(logging.DEBUG)
                file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
                file_handler.setFormatter(file_formatter)
                self.logger.addHandler(file_handler)
            except (IOError, OSError, PermissionError) as e:
                self.logger.warning(f"Could not create log file in {self.logs_dir}: {e}")

    def prepare_build_dir(self):
        """Create the build directory, clearing previous output but preserving dot-files."""
        try:
            if not os.path.exists(self.build_path):
                os.makedirs(self.build_path, exist_ok=True)
                return True

            if not os.path.isdir(self.build_path):
                self.logger.error(f"Build path {self.build_path} is not a directory. Cancelling build.")
                return False

            preserved_items = []
            for item in os.listdir(self.build_path):
                item_path = os.path.join(self.build_path, item)
                if item.startswith('.'):
                    preserved_items.append(item)
                elif os.path.isdir(item_path) and not os.path.islink(item_path):
                    shutil.rmtree(item_path)
                else:
                    os.remove(item_path)

            if preserved_items:
                self.logger.info(f"Preserved files in build directory: {', '.join(preserved_items)}")
            return True
        except (IOError, OSError, PermissionError) as e:
            self.logger.error(f"Build directory {self.build_path} is not usable: {e}. Cancelling build.")
            return False

    def write_page(self, folder, slug, page):
        """Write the HTML document and its JSON sidecar for one output path."""
        try:
            sidecar = page.exported.to_json()
        except (TypeError, ValueError) as e:
            self.logger.critical(f"Could not serialize page data for {slug}: {e}")
            raise

        base_path = join_under(self.build_path, folder, slug)
        self.files.write_text(base_path + '.html', page.html)
        self.files.write_text(base_path + '.json', sidecar)

    def generate_normal(self, route, locale):
        self.logger.debug(f"Generating page: [{route.id}] with path: \"{route.path}\"")
        page = self.assembler.assemble(route, None, locale)
        self.write_page(locale.folder, page_slug(route.path), page)
        self.pages_generated += 1

        for alias in route.aliases:
            self.logger.debug(f"Generating alias: [{alias}] for page [{route.id}]")
            self.write_page(locale.folder, page_slug(alias), page)
            self.aliases_generated += 1

    def generate_post(self, route, post, locale):
        current = post.version_for(locale.id)
        if current is None:
            self.logger.warning(f"Post [{post.id}] has no version for locale [{locale.id}], skipping")
            return

        self.logger.debug(f"Generating post: [{post.id}] with permalink: \"{current.permalink}\"")
        page = self.assembler.assemble(route, post, locale)
        post_dir = os.path.join(locale.folder, POST_FOLDER)
        self.write_page(post_dir, current.permalink, page)
        self.posts_generated += 1

        stub = make_redirect_page(current.permalink.lstrip('/') + '.html')
        for version in post.versions:
            if version.lang_id != locale.id:
                self.files.write_text(
                    join_under(self.build_path, post_dir, version.permalink + '.html'), stub
                )

    def build_pages(self):
        """Generate every route for every locale, in configured order."""
        for locale in self.site.locales:
            self.logger.info(f"Using locale: [{locale.id}] with path: [{locale.path}]")
            for route in self.site.routes:
                if route.type == ROUTE_NORMAL:
                    self.generate_normal(route, locale)
                elif route.type == ROUTE_POST:
                    for post in self.site.posts:
                        self.generate_post(route, post, locale)
                elif route.type == ROUTE_IGNORE:
                    self.logger.info(f"Page: [{route.id}] is set to be ignored")
                else:
                    self.logger.warning(f"Page: [{route.id}] has unknown type \"{route.type}\", skipping")

    def build_redirects(self):
        for redirect in self.site.redirects:
            self.logger.debug(f"Creating redirect in: [{redirect.path}] targeting: [{redirect.target}]")
            slug = redirect.path.lstrip('/')
            if not slug:
                self.logger.warning(f"Redirect from the site root targeting [{redirect.target}] skipped")
                continue
            file_path = join_under(self.build_path, slug + '.html')
            if os.path.exists(file_path):
                self.logger.warning(f"Redirect [{redirect.path}] would overwrite a generated page, skipping")
                continue
            if self.files.write_text(file_path, make_redirect_page(redirect.target)):
                self.redirects_generated += 1

    def copy_static_folders(self):
        for folder in STATIC_FOLDERS:
            source = os.path.join(self.data_path, folder)
            destination = os.path.join(self.build_path, folder)
            if self.files.copy_tree(source, destination):
                self.logger.info(f"Copied static folder {source} -> {destination}")

    def minify_assets(self):
        """Minify CSS and JS assets."""
        # Minify CSS files
        css_dir = os.path.join(self.build_path, 'css')
        for root, _, files in os.walk(css_dir):
            for file in files:
                if file.endswith('.css') and not file.endswith('.min.css'):
                    self._minify_file(os.path.join(root, file), '.css', csscompressor.compress)

        # Minify JS files
        js_dir = os.path.join(self.build_path, 'scripts')
        for root, _, files in os.walk(js_dir):
            for file in files:
                if file.endswith('.js') and not file.endswith('.min.js'):
                    self._minify_file(os.path.join(root, file), '.js', rjsmin.jsmin)

    def _minify_file(self, file_path, extension, minifier):
        contents = self.files.read_text(file_path)
        minified_path = file_path[:-len(extension)] + '.min' + extension
        if self.files.write_text(minified_path, minifier(contents)):
            self.logger.info(f"Minified {os.path.relpath(file_path, self.build_path)}")

    def build(self):
        """Main build process. Returns True when no file operation failed."""
        self.logger.info(f"Building site {self.config.site_title} inside {self.build_path} (build {self.identity.build_id})")

        if not self.prepare_build_dir():
            return False

        self.site = load_site(self.config, self.files)
        self.assembler = PageAssembler(self.site, self.identity, self.files)

        self.build_pages()
        self.build_redirects()
        self.copy_static_folders()

        if self.config.minify:
            self.minify_assets()

        return self.errors == 0
