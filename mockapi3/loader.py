import abc
import json
import logging
import re
from pathlib import Path
from typing import Optional

import yaml
import httpx
import yarl

log = logging.getLogger("mockapi3.loader")

# YAML 1.2 core schema, https://yaml.org/spec/1.2.2/#1023-core-schema
CORE_SCHEMA = {
    "bool": (r"^(?:true|True|TRUE|false|False|FALSE)$", "tTfF"),
    "int": (r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$", "-+0123456789"),
    "float": (
        r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN))$",
        "-+0123456789.",
    ),
    "null": (r"^(?:~|null|Null|NULL|)$", ["~", "n", "N", ""]),
}


class YAML12Loader(yaml.SafeLoader):
    """
    pyyaml implements YAML 1.1, description documents are YAML 1.2

    The SafeLoader implicit resolvers are replaced by the core schema ones:
    yes/no/on/off stay strings, and so do timestamps, as the documents are handled as json.
    """

    yaml_implicit_resolvers = {}


for _tag, (_regex, _first) in CORE_SCHEMA.items():
    YAML12Loader.add_implicit_resolver(f"tag:yaml.org,2002:{_tag}", re.compile(_regex), list(_first))


class Loader(abc.ABC):
    """
    a Loader gets the bytes of a description document and parses them
    """

    def __init__(self, yload: type[yaml.SafeLoader] = YAML12Loader):
        self.yload = yload

    @abc.abstractmethod
    def load(self, url: yarl.URL, codec: Optional[str] = None) -> str:
        """
        :param url: location of the description document
        :param codec: the text encoding, ascii or utf-8 if None
        :return: the decoded document
        """
        raise NotImplementedError("load")

    @staticmethod
    def decode(data: bytes, codec: Optional[str] = None) -> str:
        for c in [codec] if codec is not None else ["ascii", "utf-8"]:
            try:
                return data.decode(c)
            except UnicodeError:
                continue
        raise ValueError("encoding")

    def parse(self, url: yarl.URL, data: str):
        """
        json for .json documents, yaml for everything else
        """
        if Path(url.path).suffix == ".json":
            return json.loads(data)
        return yaml.load(data, Loader=self.yload)

    def __repr__(self):
        return f"{self.__class__.__qualname__}"


class NullLoader(Loader):
    """
    parses documents given as text, loads nothing
    """

    def load(self, url: yarl.URL, codec: Optional[str] = None) -> str:
        raise NotImplementedError("load")


class WebLoader(Loader):
    """
    gets documents via http/s, url paths are relative to baseurl
    """

    def __init__(self, baseurl: yarl.URL, session_factory=httpx.Client, yload: type[yaml.SafeLoader] = YAML12Loader):
        super().__init__(yload)
        assert isinstance(baseurl, yarl.URL)
        self.baseurl: yarl.URL = baseurl
        self.session_factory = session_factory

    def load(self, url: yarl.URL, codec: Optional[str] = None) -> str:
        url = self.baseurl.join(url)
        log.debug(f"load {url}")
        with self.session_factory() as session:
            r = session.get(str(url))
            r.raise_for_status()
        return self.decode(r.content, codec)

    def __repr__(self):
        return f"{self.__class__.__qualname__}(baseurl={self.baseurl})"


class FileSystemLoader(Loader):
    """
    reads documents below a base directory
    """

    def __init__(self, base: Path, yload: type[yaml.SafeLoader] = YAML12Loader):
        super().__init__(yload)
        assert isinstance(base, Path)
        self.base = base

    def load(self, url: yarl.URL, codec: Optional[str] = None) -> str:
        assert isinstance(url, yarl.URL)
        path = self.base / url.path.lstrip("/")
        log.debug(f"load {path}")
        return self.decode(path.read_bytes(), codec)

    def __repr__(self):
        return f"{self.__class__.__qualname__}(base={self.base})"
