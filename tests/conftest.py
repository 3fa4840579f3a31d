import copy
import logging
from pathlib import Path

import pytest
import yaml

import mockapi3.log
from mockapi3 import OpenAPI, Store
from mockapi3.loader import YAML12Loader

LOADED_FILES = {}
FIXTURES = Path(__file__).parent / "fixtures"


def _get_parsed_yaml(filename):
    """
    Returns a python dict that is a parsed yaml file from the tests/fixtures
    directory.

    :param filename: The filename to load.  Must exist in tests/fixtures and
                     include extension.
    """
    if filename not in LOADED_FILES:
        with (FIXTURES / filename).open() as f:
            raw = f.read()
        LOADED_FILES[filename] = yaml.load(raw, Loader=YAML12Loader)

    # tests may modify the document
    return copy.deepcopy(LOADED_FILES[filename])


@pytest.fixture
def with_widgets():
    """
    CRUD on /widgets with an apiKey default, parameters & media types
    """
    yield _get_parsed_yaml("widgets.yaml")


@pytest.fixture
def with_composition():
    """
    allOf/oneOf/anyOf schemas, nested and cyclic
    """
    yield _get_parsed_yaml("composition.yaml")


@pytest.fixture
def with_security():
    """
    one path per security requirement variant
    """
    yield _get_parsed_yaml("security.yaml")


@pytest.fixture
def widgets(with_widgets):
    yield OpenAPI("/", with_widgets)


@pytest.fixture
def composition(with_composition):
    yield OpenAPI("/", with_composition)


@pytest.fixture
def security(with_security):
    yield OpenAPI("/", with_security)


@pytest.fixture
def store():
    yield Store()


@pytest.fixture
def data_json(tmp_path):
    yield tmp_path / "data.json"


@pytest.fixture
def reset_logging():
    """
    undo log.init, the mockapi3 logger does not propagate once configured
    """
    yield
    logger = logging.getLogger("mockapi3")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    mockapi3.log.handlers = None
