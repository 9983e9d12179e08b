#!/usr/bin/env python3
"""
mmflow: prepare and run MetaMorpheus searches

Commands:
  mmflow prepare CFG   # write MetaMorpheus input files, print the command
  mmflow run CFG       # prepare, then run MetaMorpheus
  mmflow mods [CFG]    # list modification names known to the catalog
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from mmflow.core.catalog import ModificationCatalog
from mmflow.core.configuration import ConfigurationLoader, SearchConfiguration
from mmflow.core.errors import MetaMorpheusAdapterError
from mmflow.software.command import Invocation
from mmflow.software.metamorpheus import MetaMorpheusProcessBuilder
from mmflow.utils.logging_config import setup_logging

logger = logging.getLogger("mmflow")


def _load(args: argparse.Namespace) -> SearchConfiguration:
    config = ConfigurationLoader(Path(args.config).resolve()).load_configuration()
    if getattr(args, "install_dir", None):
        config.install_dir = Path(args.install_dir).resolve()
    if getattr(args, "fasta", None):
        config.fasta = Path(args.fasta).resolve()
    if getattr(args, "spectrum", None):
        config.spectrum = Path(args.spectrum).resolve()
    if config.fasta is None or config.spectrum is None:
        raise ValueError("both a FASTA file and a spectrum file are required (config 'inputs' or --fasta/--spectrum)")
    return config


def _prepare(args: argparse.Namespace) -> Invocation:
    config = _load(args)
    builder = MetaMorpheusProcessBuilder(
        install_dir=config.install_dir,
        search=config.search,
        spectrum_file=config.spectrum,
        fasta_file=config.fasta,
        catalog=config.catalog,
    )
    return builder.prepare()


def _fail(stage: str, e: BaseException) -> int:
    category = getattr(e, "category", None)
    if category is not None:
        logger.error("%s failed [%s]: %s", stage, category.value, e)
    else:
        logger.error("%s failed: %s", stage, e)
    print(f"error: {e}", file=sys.stderr)
    return 1


def cmd_prepare(args: argparse.Namespace) -> int:
    setup_logging(level=args.log_level)
    try:
        invocation = _prepare(args)
    except (MetaMorpheusAdapterError, OSError, ValueError, KeyError) as e:
        return _fail("prepare", e)
    print(invocation.command_line())
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    setup_logging(level=args.log_level)
    try:
        invocation = _prepare(args)
    except (MetaMorpheusAdapterError, OSError, ValueError, KeyError) as e:
        return _fail("prepare", e)
    try:
        proc = invocation.start()
    except OSError as e:
        return _fail("MetaMorpheus start", e)
    try:
        for line in proc.stdout:
            sys.stdout.write(line)
    except BaseException:
        proc.kill()
        raise
    finally:
        rc = proc.wait()
    logger.info("MetaMorpheus exited with rc=%d", rc)
    return rc


def cmd_mods(args: argparse.Namespace) -> int:
    catalog: Optional[ModificationCatalog] = None
    if args.config:
        try:
            catalog = ConfigurationLoader(Path(args.config).resolve()).load_configuration().catalog
        except (MetaMorpheusAdapterError, OSError, ValueError, KeyError) as e:
            return _fail("mods", e)
    for name in (catalog or ModificationCatalog.default()).names():
        print(name)
    return 0


def _add_search_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("config", help="Path to search YAML config")
    p.add_argument("--install-dir", help="MetaMorpheus installation folder (overrides engine.install_dir)")
    p.add_argument("--fasta", help="Protein FASTA file (overrides inputs.fasta)")
    p.add_argument("--spectrum", help="Spectrum file (overrides inputs.spectrum)")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO")


def main(argv=None):
    parser = argparse.ArgumentParser(prog="mmflow", description="Prepare and run MetaMorpheus searches")
    sub = parser.add_subparsers(dest="cmd")

    p_prepare = sub.add_parser("prepare", help="Write MetaMorpheus input files and print the command")
    _add_search_args(p_prepare)
    p_prepare.set_defaults(func=cmd_prepare)

    p_run = sub.add_parser("run", help="Prepare and run MetaMorpheus")
    _add_search_args(p_run)
    p_run.set_defaults(func=cmd_run)

    p_mods = sub.add_parser("mods", help="List known modification names")
    p_mods.add_argument("config", nargs="?", help="Optional search YAML config with extra modifications")
    p_mods.set_defaults(func=cmd_mods)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return int(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
