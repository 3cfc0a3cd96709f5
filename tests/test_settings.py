"""Tests for MosaicSettings."""

import json
import os

import pytest

from mosaic_pkg.settings import MosaicSettings


class TestMosaicSettings:
    """Test cases for MosaicSettings."""

    def test_defaults_without_config_file(self, temp_dir):
        settings = MosaicSettings(config_dir=temp_dir).load_settings()
        assert settings == MosaicSettings.DEFAULT_SETTINGS

    def test_loads_yaml(self, temp_dir):
        with open(os.path.join(temp_dir, 'mosaic.yml'), 'w', encoding='utf-8') as f:
            f.write('site_title: My Site\nweb_root: https://example.com/\nminify: true\n')

        settings = MosaicSettings(config_dir=temp_dir).load_settings()

        assert settings['site_title'] == 'My Site'
        assert settings['web_root'] == 'https://example.com/'
        assert settings['minify'] is True
        assert settings['build_path'] == 'build'

    def test_yml_preferred_over_json(self, temp_dir):
        with open(os.path.join(temp_dir, 'mosaic.yml'), 'w', encoding='utf-8') as f:
            f.write('site_title: From YAML\n')
        with open(os.path.join(temp_dir, 'mosaic.json'), 'w', encoding='utf-8') as f:
            json.dump({'site_title': 'From JSON'}, f)

        assert MosaicSettings(config_dir=temp_dir).load_settings()['site_title'] == 'From YAML'

    def test_explicit_json_path(self, temp_dir):
        path = os.path.join(temp_dir, 'site.json')
        with open(path, 'w', encoding='utf-8') as f:
            json.dump({'data_path': 'content', 'site_title_separator': '-'}, f)

        settings = MosaicSettings(config_path=path).load_settings()

        assert settings['data_path'] == 'content'
        assert settings['site_title_separator'] == '-'

    def test_explicit_path_must_exist(self, temp_dir):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            MosaicSettings(config_path=os.path.join(temp_dir, 'nope.yml')).load_settings()

    def test_invalid_yaml_falls_back_to_defaults(self, temp_dir, capsys):
        with open(os.path.join(temp_dir, 'mosaic.yml'), 'w', encoding='utf-8') as f:
            f.write('site_title: [unclosed\n')

        settings = MosaicSettings(config_dir=temp_dir).load_settings()

        assert settings == MosaicSettings.DEFAULT_SETTINGS
        assert 'Warning: Failed to load config file' in capsys.readouterr().out

    def test_non_mapping_config_is_rejected(self, temp_dir):
        path = os.path.join(temp_dir, 'mosaic.json')
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(['not', 'a', 'mapping'], f)

        with pytest.raises(ValueError, match="must contain a mapping"):
            MosaicSettings(config_dir=temp_dir)._load_config_file(path)

    def test_merge_with_args(self, temp_dir):
        loader = MosaicSettings(config_dir=temp_dir)
        loader.load_settings()

        merged = loader.merge_with_args({'site_title': 'CLI', 'build_path': None, 'minify': True})

        assert merged['site_title'] == 'CLI'
        assert merged['build_path'] == 'build'
        assert merged['minify'] is True

    @pytest.mark.parametrize('file_format', ['yml', 'json'])
    def test_sample_config_round_trips(self, temp_dir, file_format):
        loader = MosaicSettings(config_dir=temp_dir)
        path = loader.create_sample_config(file_format)

        assert os.path.basename(path) == f'mosaic.{file_format}'
        settings = MosaicSettings(config_dir=temp_dir).load_settings()
        assert settings['site_title'] == 'My Mosaic Site'
        assert settings['site_title_separator'] == '|'
        assert settings['replace_file_extension'] is False
