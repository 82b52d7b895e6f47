"""Fixtures for configuration pipeline tests."""

import shutil

import pytest
import yaml

from penalty_config import DEFAULT_CONFIG_DIR


@pytest.fixture
def config_dir(tmp_path):
    """A writable copy of the bundled default configuration set."""
    target = tmp_path / "default"
    shutil.copytree(DEFAULT_CONFIG_DIR, target)
    return target


@pytest.fixture
def edit_fragment(config_dir):
    """Rewrite one YAML fragment through a callback: ``edit_fragment(name, fn)``."""

    def _edit(file_name, mutate):
        path = config_dir / file_name
        data = yaml.safe_load(path.read_text())
        mutate(data)
        path.write_text(yaml.safe_dump(data, sort_keys=False))
        return config_dir

    return _edit
