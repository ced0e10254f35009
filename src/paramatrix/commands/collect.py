"""collect: expand the declarations of a module or class without running them."""

from __future__ import annotations

import importlib
import inspect
import os
import sys
from types import ModuleType

import click

from paramatrix.commands._base import ParamatrixCommand
from paramatrix.commands._context import AppContext
from paramatrix.domain.errors import NoSourceError
from paramatrix.services.discovery import find_sources

_EXAMPLES = """\
  paramatrix collect tests.test_adder
  paramatrix collect tests.test_adder:TestAdder
  paramatrix --json collect tests.test_adder:TestAdder
  paramatrix -q collect tests.test_adder       # failures and summary only"""


@click.command(cls=ParamatrixCommand, examples=_EXAMPLES)
@click.argument("target")
@click.pass_obj
def collect(app: AppContext, target: str) -> None:
    """List the cases declared by TARGET (``module`` or ``module:Class``)."""
    module_name, _, class_name = target.partition(":")
    module = _import_module(module_name)

    if class_name:
        subject_type = getattr(module, class_name, None)
        if not inspect.isclass(subject_type):
            raise click.BadParameter(
                f"{class_name!r} is not a class in {module_name}", param_hint="TARGET"
            )
        subjects = [subject_type]
    else:
        subjects = [
            obj
            for _, obj in inspect.getmembers(module, inspect.isclass)
            if obj.__module__ == module.__name__ and find_sources(obj)
        ]
        if not subjects:
            raise click.ClickException(f"No parameterized classes found in {module_name}")

    try:
        reports = [app.engine.collect(subject_type) for subject_type in subjects]
    except NoSourceError as exc:
        raise click.ClickException(exc.message) from exc
    app.emit(reports)


def _import_module(name: str) -> ModuleType:
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    try:
        return importlib.import_module(name)
    except ImportError as exc:
        raise click.BadParameter(f"cannot import {name!r}: {exc}", param_hint="TARGET") from exc
