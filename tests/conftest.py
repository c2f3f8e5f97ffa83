import sys
from pathlib import Path

import pytest

# Ensure the project root is on PYTHONPATH so tests can import the local shim package
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def raw_dir(tmp_path):
    # Files sit directly in the directory, as the download step leaves them
    directory = tmp_path / "fastq"
    directory.mkdir()
    return directory


@pytest.fixture
def settings_file(tmp_path):
    config_dir = tmp_path / "project" / "configs"
    config_dir.mkdir(parents=True)
    path = config_dir / "settings.yaml"
    path.write_text(
        "paths:\n"
        "  logs_root: ./logs\n"
        "manifest:\n"
        "  read_mode: paired\n"
        "  single_end_duplicates: keep\n"
    )
    return path
