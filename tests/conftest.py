from pathlib import Path

import pytest

from lxml_typed import Document


FILES_PATH = Path(__file__).parent / "files"


@pytest.fixture
def files_path():
    return FILES_PATH


@pytest.fixture
def result_file(tmp_path):
    path = tmp_path / "result.xml"
    yield path
    assert path.exists()


@pytest.fixture
def config_document(files_path):
    return Document(files_path / "config.xml")


@pytest.fixture
def sample_document():
    return Document(
        "<root>"
        '<item n="1"><name>first</name></item>'
        '<item n="2"><name>second</name></item>'
        "<!-- a comment -->"
        '<item n="3"/>'
        "</root>"
    )
