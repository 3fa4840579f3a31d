import argparse
import asyncio
import datetime
import logging
import sys
from pathlib import Path

import httpx
import yaml
import yarl
from hypercorn.asyncio import serve as hypercorn_serve
from hypercorn.config import Config

from .loader import FileSystemLoader, Loader, WebLoader
from .openapi import OpenAPI
from .server import create_app
from .store import Store
from . import log

logg = logging.getLogger("mockapi3.cli")


def loader_prepare(args, session_factory) -> Loader:
    path = yarl.URL(args.input)
    if path.scheme in ["http", "https"]:
        loader = WebLoader(baseurl=path.with_path("/").with_query({}), session_factory=session_factory)
    else:
        loader = FileSystemLoader(Path(args.locations or Path(args.input).parent).expanduser())
    return loader


def api_load(args, session_factory) -> OpenAPI:
    loader = loader_prepare(args, session_factory)
    url = yarl.URL(args.input)
    if url.scheme in ["http", "https"]:
        return OpenAPI.load_file(args.input, url.relative(), loader=loader)
    return OpenAPI.load_file(args.input, yarl.URL(Path(args.input).name), loader=loader)


def serve(app, config: Config) -> None:
    asyncio.run(hypercorn_serve(app, config))


def main(argv=None):
    parser = argparse.ArgumentParser("mockapi3", description="OpenAPI 3.0 mock server")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="be verbose")
    parser.add_argument("-L", "--locations", default=None, help="directory to load local documents from")
    parser.add_argument("--disable-ssl-validation", action="store_true", default=False)
    parser.set_defaults(func=None)
    sub = parser.add_subparsers()

    cmd = sub.add_parser("mock", help="serve the description document")
    cmd.add_argument("input")
    cmd.add_argument("-H", "--host", default="127.0.0.1")
    cmd.add_argument("-p", "--port", type=int, default=3000)
    cmd.add_argument("-d", "--data", default="data.json", help="the json file the records are persisted to")

    def cmd_mock(args: argparse.Namespace) -> int:
        try:
            api = api_load(args, session_factory)
        except (ValueError, OSError, yaml.YAMLError, httpx.HTTPError) as e:
            logg.error(f"{args.input} can not be loaded: {e}")
            return 1

        store = Store(args.data)
        app = create_app(api, store)

        config = Config()
        config.bind = [f"{args.host}:{args.port}"]
        logg.info(f"mock listening on http://{args.host}:{args.port}")
        serve(app, config)
        return 0

    cmd.set_defaults(func=cmd_mock)

    cmd = sub.add_parser("validate", help="load & check the description document")
    cmd.add_argument("input")

    def cmd_validate(args: argparse.Namespace) -> int:
        begin = datetime.datetime.now()
        try:
            api = api_load(args, session_factory)
        except (ValueError, OSError, yaml.YAMLError, httpx.HTTPError) as e:
            print(f"{args.input}: {e}")
            return 1
        duration = datetime.datetime.now() - begin

        if args.verbose:
            print(f"{api.info.title} {api.info.version} (openapi {api.openapi}) loaded in {duration}")
            for endpoint in api.endpoints():
                print(f"  {endpoint} {endpoint.operationId or ''}".rstrip())
        print("OK")
        return 0

    cmd.set_defaults(func=cmd_validate)

    args = parser.parse_args(argv)

    log.init(force=True, level="DEBUG" if args.verbose else "INFO")

    def session_factory(*args_, **kwargs) -> httpx.Client:
        return httpx.Client(*args_, verify=args.disable_ssl_validation is False, **kwargs)

    if args.func is None:
        parser.print_help()
        return 2

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
