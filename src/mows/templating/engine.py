"""Template set loading and rendering on top of kida.

A ``TemplateEngine`` owns one kida ``Environment`` built from a glob
pattern. Templates are addressed by file basename (``"home.html"``),
wherever the pattern found them.

In dev mode the context calls ``load()`` before every render so edits on
disk show up without a restart. The rebuild is not synchronized with
concurrent renders; it is a development convenience for a single client.
"""

import dataclasses
import glob
import logging
from collections.abc import Callable
from fnmatch import fnmatch
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from mows.errors import TemplateError, TemplatesNotLoadedError
from mows.templating.funcs import default_funcs

logger = logging.getLogger("mows.templating")


class TemplateEngine:
    """A loaded (or loadable) template set plus its helper functions.

    Usage::

        templates = TemplateEngine("views/*.html")
        templates.load()
        html = templates.render("home.html", {"title": "mows"})

    Pass *package* to load from an importable package instead of the
    filesystem; *pattern* is then relative to the package root and hot
    reload does not apply.
    """

    __slots__ = ("_env", "autoescape", "funcs", "package", "pattern")

    def __init__(
        self,
        pattern: str | None = None,
        *,
        package: str | None = None,
        funcs: dict[str, Callable[..., Any]] | None = None,
        autoescape: bool = True,
    ) -> None:
        self.pattern = pattern
        self.package = package
        self.autoescape = autoescape
        self.funcs: dict[str, Callable[..., Any]] = default_funcs()
        if funcs:
            self.funcs.update(funcs)
        self._env: Environment | None = None

    @property
    def loaded(self) -> bool:
        return self._env is not None

    @property
    def reloadable(self) -> bool:
        """Only filesystem template sets can be hot-reloaded."""
        return self.pattern is not None and self.package is None

    @property
    def environment(self) -> Environment:
        if self._env is None:
            raise TemplatesNotLoadedError()
        return self._env

    def add_func(self, name: str, func: Callable[..., Any]) -> None:
        """Register a helper; applies to the current set and future loads."""
        if not callable(func):
            msg = f"Template function {name!r} must be callable, got {type(func).__name__}."
            raise TemplateError(msg)
        self.funcs[name] = func
        if self._env is not None:
            self._env.add_global(name, func)
            self._env.update_filters({name: func})

    def load(self) -> None:
        """(Re)build the environment from the pattern."""
        if self.pattern is None:
            raise TemplatesNotLoadedError()
        if self.package is not None:
            loaders = [PackageLoader(self.package, d) for d in self._package_dirs()]
        else:
            loaders = [FileSystemLoader(str(d)) for d in self._filesystem_dirs()]

        env = Environment(
            loader=loaders[0] if len(loaders) == 1 else ChoiceLoader(loaders),
            autoescape=self.autoescape,
            auto_reload=False,
        )
        env.update_filters(self.funcs)
        for name, func in self.funcs.items():
            env.add_global(name, func)

        self._env = env
        logger.debug("loaded templates from %s", self.pattern)

    def render(self, name: str, data: Any = None) -> str:
        """Render template *name* with *data* (a mapping, a dataclass, or ``None``)."""
        env = self.environment
        try:
            context = _template_context(data)
            template = env.get_template(name)
            return template.render(context)
        except Exception as exc:
            msg = f"rendering {name!r}: {exc}"
            raise TemplateError(msg) from exc

    # -- Discovery --

    def _filesystem_dirs(self) -> list[Path]:
        assert self.pattern is not None
        matches = sorted(
            Path(p) for p in glob.glob(self.pattern, recursive=True) if Path(p).is_file()
        )
        if not matches:
            msg = f"template pattern {self.pattern!r} matches no files"
            raise TemplateError(msg)
        return _unique([p.parent for p in matches])

    def _package_dirs(self) -> list[str]:
        assert self.pattern is not None and self.package is not None
        root = resources.files(self.package)
        found: list[str] = []
        for rel, entry in _walk(root, PurePosixPath()):
            if entry.is_file() and fnmatch(str(rel), self.pattern):
                found.append(str(rel.parent))
        if not found:
            msg = f"template pattern {self.pattern!r} matches no files in package {self.package!r}"
            raise TemplateError(msg)
        return _unique(found)


def _walk(node: Traversable, rel: PurePosixPath) -> list[tuple[PurePosixPath, Traversable]]:
    entries: list[tuple[PurePosixPath, Traversable]] = []
    for child in node.iterdir():
        child_rel = rel / child.name
        entries.append((child_rel, child))
        if child.is_dir():
            entries.extend(_walk(child, child_rel))
    return entries


def _unique[T](items: list[T]) -> list[T]:
    seen: set[T] = set()
    result: list[T] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def _template_context(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return {f.name: getattr(data, f.name) for f in dataclasses.fields(data)}
    return dict(data)
